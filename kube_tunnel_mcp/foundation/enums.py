"""Core enums for kube-tunnel MCP."""

from enum import Enum


class Verb(str, Enum):
    """Operation verbs understood by the dispatcher."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOGS = "logs"

    @property
    def is_mutating(self) -> bool:
        return self in (Verb.CREATE, Verb.UPDATE, Verb.DELETE)


class Route(str, Enum):
    """Where an operation executes."""

    LOCAL = "local"
    FORWARD = "forward"
