"""
League rank series transformation.

Turns per-team gameweek histories into one record per gameweek holding every
team's league position at that point in the season.
"""

import logging
from typing import Dict, List, Sequence

from ingest.fpl.errors import EmptyHistoryError, InvalidLeagueDataError
from ingest.fpl.models import RankedGameweekPoint, TeamHistory, TeamRank, TeamStanding

logger = logging.getLogger(__name__)


def build_series(standings: Sequence[TeamStanding],
                 teams_history: Sequence[TeamHistory]) -> List[RankedGameweekPoint]:
    """
    Build the dense gameweek-by-gameweek rank series.

    Every team in ``standings`` appears in every gameweek. A gameweek missing
    from a team's history (or a team missing from ``teams_history``) counts as
    0 cumulative points. Equal totals keep standings order, so repeated calls
    on the same input give the same ranks.

    Args:
        standings: Teams in current standings order
        teams_history: Fetched histories, any subset of the standings teams

    Returns:
        One RankedGameweekPoint per gameweek, 1..max observed gameweek

    Raises:
        InvalidLeagueDataError: If there are no teams
        EmptyHistoryError: If no history holds any gameweek
    """
    if not standings:
        raise InvalidLeagueDataError("Cannot build a series for a league with no teams")

    by_entry: Dict[int, TeamHistory] = {team.entry: team for team in teams_history}
    max_gameweek = max((team.last_gameweek for team in teams_history), default=0)
    if max_gameweek < 1:
        raise EmptyHistoryError("No team has any gameweek history")

    missing = [team.entry for team in standings if team.entry not in by_entry]
    if missing:
        logger.info(f"Teams without history ranked on 0 points: {missing}")

    series: List[RankedGameweekPoint] = []
    for gameweek in range(1, max_gameweek + 1):
        rows = []
        for team in standings:
            history = by_entry.get(team.entry)
            gw = history.entry_for(gameweek) if history is not None else None
            rows.append((team, gw))

        # sorted() is stable, so ties stay in standings order
        ordered = sorted(rows, key=lambda row: -(row[1].total_points if row[1] else 0))
        rank_by_entry = {team.entry: rank for rank, (team, _) in enumerate(ordered, start=1)}

        series.append(RankedGameweekPoint(
            gameweek=gameweek,
            teams=tuple(
                TeamRank(
                    entry=team.entry,
                    entry_name=team.entry_name,
                    rank=rank_by_entry[team.entry],
                    total_points=gw.total_points if gw else 0,
                    event_points=gw.points if gw else 0,
                    transfers_cost=gw.event_transfers_cost if gw else 0,
                )
                for team, gw in rows
            ),
        ))

    return series
