"""Operation-scoped logging and MCP response helpers.

Messages carry the operation and, when known, the managed cluster they
concern: ``forward request [east-1]: GET https://...``.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger("kube_tunnel_mcp")


def _format(operation: str, message: str, cluster: Optional[str] = None) -> str:
    if cluster:
        return f"{operation} [{cluster}]: {message}"
    return f"{operation}: {message}"


class LoggingUtility:
    """Static helpers shared by the dispatcher, tunnel and server."""

    @staticmethod
    def log_info(operation: str, message: str, cluster: Optional[str] = None) -> None:
        logger.info(_format(operation, message, cluster))

    @staticmethod
    def log_warning(operation: str, message: str, cluster: Optional[str] = None) -> None:
        logger.warning(_format(operation, message, cluster))

    @staticmethod
    def log_debug(operation: str, message: str, cluster: Optional[str] = None) -> None:
        logger.debug(_format(operation, message, cluster))

    @staticmethod
    def log_error(operation: str, error: Exception) -> None:
        """Log an exception with its type; dispatch errors already name their cluster."""
        logger.error(_format(operation, f"{type(error).__name__}: {error}"))


def success_response(**kwargs) -> dict[str, Any]:
    return {"status": "success", **kwargs}


def error_response(message: str, **kwargs) -> dict[str, Any]:
    return {"status": "error", "message": message, **kwargs}
