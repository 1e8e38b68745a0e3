"""Minimal foundation for kube-tunnel MCP."""

from .enums import Route, Verb
from .logging_utils import LoggingUtility, error_response, success_response

__all__ = [
    "Route",
    "Verb",
    "LoggingUtility",
    "success_response",
    "error_response",
]
