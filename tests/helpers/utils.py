"""Test utilities for kube-tunnel MCP tests."""

import json
from typing import Any, Dict, List

from mcp.types import TextContent


def get_text_content(result: List[TextContent]) -> str:
    """Helper function to extract text content from MCP result."""
    content = list(result)[0]
    assert isinstance(content, TextContent)
    return content.text


def parse_tool_result(result: List[TextContent]) -> Dict[str, Any]:
    """Decode the JSON payload of a tool reply."""
    return json.loads(get_text_content(result))
