"""
League view pipeline.

Fetches a league and derives everything the charts and tables consume:
the ranked gameweek series and each team's recent form.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ingest.fpl.league import LeagueFetchOrchestrator
from ingest.fpl.models import (
    FormPoint,
    LeagueData,
    RankedGameweekPoint,
    TeamHistory,
    TeamStanding,
)
from .form import compute_form
from .series import build_series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeagueView:
    """Everything the presentation layer needs for one league."""
    league_name: str
    standings: Tuple[TeamStanding, ...]
    teams_history: Tuple[TeamHistory, ...]
    series: Tuple[RankedGameweekPoint, ...]
    form: Dict[int, List[FormPoint]]

    @classmethod
    def from_league_data(cls, data: LeagueData) -> 'LeagueView':
        standings = data.snapshot.standings
        series = build_series(standings, data.teams_history)
        return cls(
            league_name=data.snapshot.league_name,
            standings=standings,
            teams_history=data.teams_history,
            series=tuple(series),
            form=compute_form(standings, series),
        )

    def chart_rows(self) -> List[Dict[str, Any]]:
        return [point.to_chart_row() for point in self.series]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'leagueName': self.league_name,
            'standings': [team.to_dict() for team in self.standings],
            'teamsHistory': [team.to_dict() for team in self.teams_history],
            'series': [point.to_dict() for point in self.series],
            'form': {
                str(entry): [point.to_dict() for point in points]
                for entry, points in self.form.items()
            },
        }


async def load_league_view(league_id, orchestrator: Optional[LeagueFetchOrchestrator] = None,
                           force_refresh: bool = False) -> LeagueView:
    """
    Fetch a league and build its ranked series and form.

    Raises:
        OrchestrationError: If the standings could not be fetched
        EmptyHistoryError: If no team history could be fetched
    """
    owned = orchestrator is None
    orchestrator = orchestrator or LeagueFetchOrchestrator.from_config()
    try:
        data = await orchestrator.fetch_league_data(league_id, force_refresh=force_refresh)
    finally:
        if owned:
            orchestrator.close()
    view = LeagueView.from_league_data(data)
    logger.info(f"Built {len(view.series)} gameweeks for '{view.league_name}'")
    return view
