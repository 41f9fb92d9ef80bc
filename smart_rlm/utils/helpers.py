"""
Helper utility functions.

This module contains common utility functions used throughout the application:
- Cleaning model output into runnable source code
- Parsing structured (JSON) model output
- Shortening long text for single-line log records
- Driving coroutines from synchronous entry points
"""

import asyncio
import json
import re
import textwrap
from typing import Any, Awaitable, Dict, Optional, TypeVar

from smart_rlm.config.constants import LOG_PREVIEW_CHARS

T = TypeVar("T")

# A line holding only a fence, with an optional language tag, e.g. ```python
_FENCE_LINE_RE = re.compile(r"^[ \t]*```[\w+-]*[ \t]*\r?$", re.MULTILINE)


def strip_code_fences(text: str) -> str:
    """
    Remove Markdown code fences from a model response.

    The root agent is told to answer with raw code only, but models still
    wrap it in fences now and then. Lines that hold only an opening fence
    (with or without a language tag) or a closing fence are removed, then
    the code is dedented and trimmed. Backticks inside the code are kept.

    Args:
        text: Raw model response

    Returns:
        str: Source code without fencing

    Example:
        >>> strip_code_fences("```python\\nreport('hi')\\n```")
        "report('hi')"
    """
    if not text:
        return ""
    code = _FENCE_LINE_RE.sub("", text)
    return textwrap.dedent(code).strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Parse a model response that must be a single JSON object.

    Args:
        text: Raw model response

    Returns:
        Dict[str, Any]: Parsed object

    Raises:
        ValueError: If the text is not JSON or not a JSON object
    """
    data = json.loads(text or "{}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def preview(text: str, limit: int = LOG_PREVIEW_CHARS) -> str:
    """Single-line, length-capped rendering of text for log records."""
    flat = (text or "").replace("\n", "\\n")
    if len(flat) <= limit:
        return flat
    return flat[:limit] + f"... [+{len(flat) - limit:,} chars]"


_blocking_loop: Optional[asyncio.AbstractEventLoop] = None


def run_blocking(coro: Awaitable[T]) -> T:
    """
    Run a coroutine to completion from synchronous code.

    Every call shares one process-wide event loop, so async HTTP clients
    cached by the model client stay bound to a live loop across queries.
    Must not be called from inside a running event loop.
    """
    global _blocking_loop
    if _blocking_loop is None or _blocking_loop.is_closed():
        _blocking_loop = asyncio.new_event_loop()
    return _blocking_loop.run_until_complete(coro)
