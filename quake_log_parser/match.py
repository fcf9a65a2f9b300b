"""Per-match kill accumulation for the Quake log parser."""
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Set

from quake_log_parser.transformers import WORLD_SENTINEL, KillEvent


def match_key(number: int) -> str:
    """Label under which match ``number`` is stored in parse results."""
    return f"game_{number}"


@dataclass(frozen=True)
class MatchRecord:
    """Finalized, read-only state of one match.

    Records compare by value but are not hashable: the kill maps are
    read-only views of dicts.
    """
    __hash__ = None

    number: int
    total_kills: int = 0
    players: FrozenSet[str] = frozenset()
    kills: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    kills_by_means: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def key(self) -> str:
        return match_key(self.number)


class MatchAccumulator:
    """Mutable tallies for the match currently being parsed."""

    def __init__(self, number: int):
        """Start an empty match.

        Args:
            number: Sequence number of the match, starting at 1
        """
        self.number = number
        self.total_kills = 0
        self.players: Set[str] = set()
        self.kills: Dict[str, int] = defaultdict(int)
        self.kills_by_means: Dict[str, int] = defaultdict(int)

    def apply_kill(self, killer: str, victim: str, cause: str) -> None:
        """Record one kill line.

        A kill by ``<world>`` costs the victim a point and registers nobody
        as a player; any other kill registers both sides and credits only the
        killer.
        """
        self.total_kills += 1
        self.kills_by_means[cause] += 1

        if killer == WORLD_SENTINEL:
            self.kills[victim] -= 1
        else:
            self.players.add(killer)
            self.players.add(victim)
            self.kills[killer] += 1

    def apply(self, event: KillEvent) -> None:
        self.apply_kill(event.killer, event.victim, event.cause)

    def finalize(self) -> MatchRecord:
        """Snapshot the current tallies into an immutable record."""
        return MatchRecord(
            number=self.number,
            total_kills=self.total_kills,
            players=frozenset(self.players),
            kills=MappingProxyType(dict(self.kills)),
            kills_by_means=MappingProxyType(dict(self.kills_by_means)),
        )
