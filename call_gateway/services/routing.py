"""Selection of the soft-phone that answers inbound calls."""

from typing import Protocol


class RoutingStrategy(Protocol):
    """Picks the client identity an inbound call is connected to."""

    def select_target(self) -> str:
        """Return the client identity to dial."""
        ...


class FixedAgentRouting(RoutingStrategy):
    """Always route to the same agent."""

    def __init__(self, identity: str = "agent_1") -> None:
        self.identity = identity

    def select_target(self) -> str:
        return self.identity
