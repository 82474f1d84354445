"""Response helpers shared by the catalog tools.

Tool results follow one shape: ``content`` holds human-readable text,
``data`` holds structured values for follow-up calls, and failures carry
``isError: True`` with no data.
"""

import asyncio
from typing import Any

from pydantic import ValidationError

from ..config import get_config


def text_response(message: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    response: dict[str, Any] = {"content": [{"type": "text", "text": message}]}
    if data is not None:
        response["data"] = data
    return response


def error_response(message: str) -> dict[str, Any]:
    return {"isError": True, "content": [{"type": "text", "text": message}]}


def validation_message(error: ValidationError) -> str:
    """Collapse a pydantic error into one line per offending field."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "input"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


async def simulate_latency() -> None:
    """Wait for the configured artificial delay, if any."""
    delay = get_config().simulated_latency
    if delay > 0:
        await asyncio.sleep(delay)
