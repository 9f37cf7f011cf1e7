"""
FPL league data models.

Immutable records for league standings, per-team gameweek histories and the
ranked series derived from them. Each record converts to and from plain
dictionaries so the whole bundle can be JSON-serialized into the cache.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

UNKNOWN_LEAGUE_NAME = "Unknown League"


@dataclass(frozen=True)
class TeamStanding:
    """One team's row in the league standings."""
    entry: int
    entry_name: str
    rank: int
    total: int
    event_total: int
    event_transfers_cost: int = 0
    player_name: str = ""

    @classmethod
    def from_api(cls, row: Dict[str, Any]) -> 'TeamStanding':
        return cls(
            entry=int(row["entry"]),
            entry_name=str(row.get("entry_name", row["entry"])),
            rank=int(row.get("rank") or 0),
            total=int(row.get("total") or 0),
            event_total=int(row.get("event_total") or 0),
            event_transfers_cost=int(row.get("event_transfers_cost") or 0),
            player_name=str(row.get("player_name") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entry': self.entry,
            'entry_name': self.entry_name,
            'player_name': self.player_name,
            'rank': self.rank,
            'total': self.total,
            'event_total': self.event_total,
            'event_transfers_cost': self.event_transfers_cost,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamStanding':
        return cls.from_api(data)


@dataclass(frozen=True)
class LeagueSnapshot:
    """Result of one standings fetch."""
    league_id: int
    league_name: str
    standings: Tuple[TeamStanding, ...]

    @classmethod
    def from_api(cls, league_id: int, payload: Dict[str, Any]) -> 'LeagueSnapshot':
        """
        Build a snapshot from the upstream standings payload.

        Args:
            league_id: Classic league identifier the payload was fetched for
            payload: ``/leagues-classic/{id}/standings/`` response body

        Returns:
            LeagueSnapshot with standings in upstream order
        """
        league = payload.get("league") or {}
        results = payload["standings"]["results"]
        return cls(
            league_id=int(league_id),
            league_name=league.get("name") or UNKNOWN_LEAGUE_NAME,
            standings=tuple(TeamStanding.from_api(row) for row in results),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'league_id': self.league_id,
            'league_name': self.league_name,
            'standings': [team.to_dict() for team in self.standings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeagueSnapshot':
        return cls(
            league_id=int(data["league_id"]),
            league_name=data.get("league_name") or UNKNOWN_LEAGUE_NAME,
            standings=tuple(TeamStanding.from_dict(row) for row in data["standings"]),
        )


@dataclass(frozen=True)
class GameweekEntry:
    """One team's result for a single gameweek."""
    event: int
    total_points: int
    points: int
    event_transfers_cost: int = 0

    @property
    def net_points(self) -> int:
        return self.points - self.event_transfers_cost

    @classmethod
    def from_api(cls, row: Dict[str, Any]) -> 'GameweekEntry':
        return cls(
            event=int(row["event"]),
            total_points=int(row.get("total_points") or 0),
            points=int(row.get("points") or 0),
            event_transfers_cost=int(row.get("event_transfers_cost") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event': self.event,
            'total_points': self.total_points,
            'points': self.points,
            'event_transfers_cost': self.event_transfers_cost,
        }


@dataclass(frozen=True)
class TeamHistory:
    """A team's gameweek entries, ordered by gameweek."""
    entry: int
    entry_name: str
    history: Tuple[GameweekEntry, ...] = ()
    _by_event: Dict[int, GameweekEntry] = field(default_factory=dict, init=False,
                                                repr=False, compare=False)

    def __post_init__(self):
        ordered = tuple(sorted(self.history, key=lambda gw: gw.event))
        object.__setattr__(self, 'history', ordered)
        object.__setattr__(self, '_by_event', {gw.event: gw for gw in ordered})

    @classmethod
    def from_api(cls, team: TeamStanding, payload: Dict[str, Any]) -> 'TeamHistory':
        return cls(
            entry=team.entry,
            entry_name=team.entry_name,
            history=tuple(GameweekEntry.from_api(row) for row in payload["current"]),
        )

    def entry_for(self, gameweek: int) -> Optional[GameweekEntry]:
        return self._by_event.get(gameweek)

    @property
    def last_gameweek(self) -> int:
        return self.history[-1].event if self.history else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entry': self.entry,
            'entry_name': self.entry_name,
            'history': [gw.to_dict() for gw in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamHistory':
        return cls(
            entry=int(data["entry"]),
            entry_name=data["entry_name"],
            history=tuple(GameweekEntry.from_api(row) for row in data["history"]),
        )


@dataclass(frozen=True)
class LeagueData:
    """Standings plus every successfully fetched team history."""
    snapshot: LeagueSnapshot
    teams_history: Tuple[TeamHistory, ...] = ()

    @property
    def omitted_entries(self) -> List[int]:
        """Teams present in standings whose history is missing."""
        fetched = {team.entry for team in self.teams_history}
        return [team.entry for team in self.snapshot.standings if team.entry not in fetched]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'snapshot': self.snapshot.to_dict(),
            'teams_history': [team.to_dict() for team in self.teams_history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeagueData':
        return cls(
            snapshot=LeagueSnapshot.from_dict(data["snapshot"]),
            teams_history=tuple(TeamHistory.from_dict(team) for team in data["teams_history"]),
        )


@dataclass(frozen=True)
class TeamRank:
    """A team's position and points at one gameweek."""
    entry: int
    entry_name: str
    rank: int
    total_points: int
    event_points: int = 0
    transfers_cost: int = 0

    @property
    def net_points(self) -> int:
        return self.event_points - self.transfers_cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entry': self.entry,
            'entry_name': self.entry_name,
            'rank': self.rank,
            'total_points': self.total_points,
            'event_points': self.event_points,
            'transfers_cost': self.transfers_cost,
        }


@dataclass(frozen=True)
class RankedGameweekPoint:
    """Every team's rank at one gameweek, in standings order."""
    gameweek: int
    teams: Tuple[TeamRank, ...]

    def rank_of(self, entry: int) -> Optional[int]:
        for team in self.teams:
            if team.entry == entry:
                return team.rank
        return None

    def to_chart_row(self) -> Dict[str, Any]:
        """Flatten to ``{"gameweek": g, <entry_name>: rank, ...}`` for line charts."""
        row: Dict[str, Any] = {'gameweek': self.gameweek}
        for team in self.teams:
            row[team.entry_name] = team.rank
        return row

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gameweek': self.gameweek,
            'teams': [team.to_dict() for team in self.teams],
        }


class FormClass(str, Enum):
    """Gameweek score relative to the league average."""
    ABOVE = "above"
    EQUAL = "equal"
    BELOW = "below"


@dataclass(frozen=True)
class FormPoint:
    gameweek: int
    classification: FormClass
    points: int
    average: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gameweek': self.gameweek,
            'classification': self.classification.value,
            'points': self.points,
            'average': self.average,
        }
