"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Add src to path for imports when running without an installed package
sys.path.insert(0, str(Path(__file__).parent.parent))

from ingest.fpl.errors import NetworkError


class RecordingSleep:
    """Async sleep stand-in that records requested delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeTransport:
    """
    Scripted transport.

    ``routes`` maps a URL substring to a list of outcomes consumed in order;
    an outcome is either a JSON body or an Exception to raise. The last
    outcome repeats once the list is exhausted. ``proxy_failures`` lists
    proxies that always fail.
    """

    def __init__(self, routes: Optional[Dict[str, List[Any]]] = None,
                 proxy_failures: Tuple[str, ...] = ()):
        self.routes = {key: list(value) for key, value in (routes or {}).items()}
        self.proxy_failures = set(proxy_failures)
        self.calls: List[Tuple[str, str]] = []
        self.closed = False

    async def get(self, url: str, proxy: str = "") -> Any:
        self.calls.append((url, proxy))
        if proxy in self.proxy_failures:
            raise NetworkError(502, f"proxy {proxy} unavailable")
        for fragment, outcomes in self.routes.items():
            if fragment in url:
                outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise NetworkError(404, f"no route for {url}")

    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]

    def close(self) -> None:
        self.closed = True


def make_standings(rows: List[Dict[str, Any]], name: str = "Test League") -> Dict[str, Any]:
    return {
        "league": {"id": 314, "name": name},
        "standings": {"has_next": False, "page": 1, "results": rows},
    }


def standing_row(entry: int, entry_name: str, rank: int, total: int = 0,
                 event_total: int = 0) -> Dict[str, Any]:
    return {
        "id": entry * 10,
        "entry": entry,
        "entry_name": entry_name,
        "player_name": f"Manager {entry}",
        "rank": rank,
        "last_rank": rank,
        "total": total,
        "event_total": event_total,
    }


def make_history(weekly_points: List[int], costs: Optional[List[int]] = None) -> Dict[str, Any]:
    """History body with cumulative totals accumulated from weekly points."""
    costs = costs or [0] * len(weekly_points)
    current = []
    total = 0
    for event, (points, cost) in enumerate(zip(weekly_points, costs), start=1):
        total += points - cost
        current.append({
            "event": event,
            "points": points,
            "total_points": total,
            "rank": 1000,
            "event_transfers": 1 if cost else 0,
            "event_transfers_cost": cost,
            "points_on_bench": 4,
        })
    return {"current": current, "past": [], "chips": []}


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def three_team_standings() -> Dict[str, Any]:
    return make_standings([
        standing_row(101, "Alpha", 1, total=180, event_total=70),
        standing_row(202, "Bravo", 2, total=160, event_total=50),
        standing_row(303, "Charlie", 3, total=150, event_total=40),
    ])


@pytest.fixture
def three_team_histories() -> Dict[int, Dict[str, Any]]:
    return {
        101: make_history([50, 60, 70]),
        202: make_history([60, 50, 50]),
        303: make_history([40, 70, 40]),
    }
