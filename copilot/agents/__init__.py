"""
Sales Copilot Agents

Prompt-building agents for brainstorming, case search, sales scripts and ingestion.
"""

from copilot.agents.base import AgentFactory
from copilot.agents.orchestration import orchestration_agent
from copilot.agents.trend_finder import trend_finder_agent
from copilot.agents.source_collector import source_collector_agent
from copilot.agents.scene_translator import scene_translator_agent
from copilot.agents.insight_summarizer import insight_summarizer_agent
from copilot.agents.sales_generator import sales_script_generator_agent
from copilot.agents.value_proposition import value_proposition_agent
from copilot.agents.data_ingestion import data_ingestion_agent

ALL_AGENTS = [
    orchestration_agent,
    trend_finder_agent,
    source_collector_agent,
    scene_translator_agent,
    insight_summarizer_agent,
    sales_script_generator_agent,
    value_proposition_agent,
    data_ingestion_agent,
]

for _agent in ALL_AGENTS:
    AgentFactory.register(_agent)

__all__ = [
    "AgentFactory",
    "ALL_AGENTS",
    "orchestration_agent",
    "trend_finder_agent",
    "source_collector_agent",
    "scene_translator_agent",
    "insight_summarizer_agent",
    "sales_script_generator_agent",
    "value_proposition_agent",
    "data_ingestion_agent",
]
