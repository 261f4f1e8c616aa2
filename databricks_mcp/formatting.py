"""
Tool Result Formatting

Renders facade results and gateway failures as MCP tool content. Text is
pretty-printed JSON, cut at CHARACTER_LIMIT so a single large listing
cannot flood the agent's context.
"""

from __future__ import annotations

import json
from typing import Any

from .config import CHARACTER_LIMIT
from .errors import GatewayFailure
from .models import TextContent, ToolCallResult


def truncate(text: str, limit: int = CHARACTER_LIMIT) -> str:
    """Cut text at the limit and say so."""
    if len(text) <= limit:
        return text
    return (
        f"{text[:limit]}\n\n"
        f"[Response truncated: {len(text)} characters exceeds the {limit} character limit. "
        "Use pagination or filters to narrow the result.]"
    )


def format_response(data: Any) -> ToolCallResult:
    """Render a facade result as JSON text content."""
    text = json.dumps(data, indent=2, default=str)
    return ToolCallResult(content=[TextContent(text=truncate(text))])


def format_error(failure: GatewayFailure) -> ToolCallResult:
    """Render a failure as an error result carrying its structured envelope."""
    text = json.dumps(failure.to_dict(), indent=2)
    return ToolCallResult(content=[TextContent(text=text)], isError=True)
