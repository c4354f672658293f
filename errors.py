"""
Error taxonomy for route calculation.

Solvers never recover from these; they propagate to the caller so a failed
solve never yields a truncated path.
"""

from typing import Any


class RoutingError(Exception):
    """Base class for all routing failures."""


class NoPathFound(RoutingError):
    """Destination is unreachable from origin in the given graph."""

    def __init__(self, origin: Any, destination: Any) -> None:
        super().__init__(f"No path from {origin!r} to {destination!r}")
        self.origin = origin
        self.destination = destination


class InvalidEdgeQuery(RoutingError, KeyError):
    """Graph was asked for a weight between nodes with no connecting edge."""

    def __init__(self, a: Any, b: Any) -> None:
        super().__init__(f"No edge between {a!r} and {b!r}")
        self.a = a
        self.b = b

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnknownNode(RoutingError, ValueError):
    """Node is not part of the graph being queried."""

    def __init__(self, node: Any) -> None:
        super().__init__(f"Node {node!r} is not in the graph")
        self.node = node


class SolveCancelled(RoutingError):
    """Solve was cancelled cooperatively between iterations."""
