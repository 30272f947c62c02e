"""
Rate-limited HTTP GET shared by the collectors
"""
import time

import requests

from copilot import config


def rate_limited_get(url: str, headers: dict = None, params: dict = None,
                     delay: float = 1.0, timeout: int = 15) -> requests.Response:
    """
    Sleep `delay` seconds, then GET. When the API reports an exhausted
    quota (X-RateLimit-Remaining: 0) wait until the reset time before
    returning, never less than RATE_LIMIT_MIN_WAIT.
    """
    time.sleep(delay)

    request_headers = {
        "Accept": "application/json",
        "User-Agent": config.USER_AGENT,
        **(headers or {}),
    }
    response = requests.get(url, headers=request_headers, params=params, timeout=timeout)

    remaining = response.headers.get("X-RateLimit-Remaining")
    reset = response.headers.get("X-RateLimit-Reset")

    if remaining == "0":
        wait = config.RATE_LIMIT_MIN_WAIT
        if reset:
            try:
                wait = max(float(reset) - time.time(), config.RATE_LIMIT_MIN_WAIT)
            except ValueError:
                pass
        print(f"⚠️ [HTTP] Rate limit reached, waiting {int(wait)}s...")
        time.sleep(wait)

    return response
