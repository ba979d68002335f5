"""In-memory presence table for tracked peers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PresenceChange:
    peer: str
    online: bool

    def describe(self) -> str:
        return f"{self.peer} is {'online' if self.online else 'offline'}"


class PresenceTable(Mapping[str, bool]):
    """Peer name -> last known online flag.

    The key set is fixed at construction; ``apply`` only flips values. Names
    in a poll result that are not tracked are ignored.
    """

    def __init__(self, peers: Iterable[str]) -> None:
        self._state: dict[str, bool] = dict.fromkeys(peers, False)

    def __getitem__(self, peer: str) -> bool:
        return self._state[peer]

    def __iter__(self) -> Iterator[str]:
        return iter(self._state)

    def __len__(self) -> int:
        return len(self._state)

    def __repr__(self) -> str:
        return f"PresenceTable({self._state!r})"

    @property
    def peers(self) -> tuple[str, ...]:
        return tuple(self._state)

    def online_peers(self) -> list[str]:
        return [peer for peer, online in self._state.items() if online]

    def seed(self, peer: str, online: bool) -> None:
        """Set an initial value for an existing peer (no change record)."""
        if peer not in self._state:
            raise KeyError(peer)
        self._state[peer] = online

    def apply(self, online: Iterable[str]) -> list[PresenceChange]:
        """Reconcile the table with one poll result.

        Returns the changes in table order; peers whose state did not flip
        produce nothing.
        """
        online_set = frozenset(online)
        changes: list[PresenceChange] = []
        for peer, was_online in self._state.items():
            now_online = peer in online_set
            if now_online != was_online:
                self._state[peer] = now_online
                changes.append(PresenceChange(peer, now_online))
        return changes
