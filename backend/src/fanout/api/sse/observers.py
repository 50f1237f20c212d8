"""Observer interface for registry membership changes."""

from __future__ import annotations

from typing import Protocol


class RegistryObserver(Protocol):
    """Receives a callback whenever a client joins or leaves the registry."""

    def client_added(self, identity: str) -> None: ...

    def client_removed(self, identity: str) -> None: ...


class ConnectionStats:
    """Running totals of connects and disconnects since startup."""

    def __init__(self) -> None:
        self.connections_total = 0
        self.disconnections_total = 0

    def client_added(self, identity: str) -> None:
        self.connections_total += 1

    def client_removed(self, identity: str) -> None:
        self.disconnections_total += 1
