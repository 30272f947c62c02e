"""
Sales Copilot - AI Agent Case Library and Sales Assistant

Collects AI agent projects from GitHub, Hacker News, and Reddit, scores and
stores them, then answers sales questions over the library using Google's
Gemini API.
"""

__version__ = "1.0.0"
