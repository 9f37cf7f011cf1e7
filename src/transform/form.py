"""
Recent form relative to the league average.
"""

from typing import Dict, List, Sequence

from ingest.fpl.errors import InvalidLeagueDataError
from ingest.fpl.models import FormClass, FormPoint, RankedGameweekPoint, TeamStanding
from utils.constants import FORM_WINDOW


def classify(points: float, average: float) -> FormClass:
    if points > average:
        return FormClass.ABOVE
    if points < average:
        return FormClass.BELOW
    return FormClass.EQUAL


def compute_form(standings: Sequence[TeamStanding],
                 series_tail: Sequence[RankedGameweekPoint],
                 window: int = FORM_WINDOW) -> Dict[int, List[FormPoint]]:
    """
    Classify each team's last ``window`` gameweeks against the field average.

    The average is the mean of every team's points for that gameweek alone
    (net of transfer cost), not the cumulative total.

    Args:
        standings: Teams in standings order; keys of the result follow it
        series_tail: Ranked series, typically the output of ``build_series``;
            only the last ``window`` points are used

    Returns:
        Mapping of entry id to its form points, oldest gameweek first
    """
    if not standings:
        raise InvalidLeagueDataError("Cannot compute form for a league with no teams")

    form: Dict[int, List[FormPoint]] = {team.entry: [] for team in standings}
    tail = list(series_tail)[-window:] if window > 0 else []
    for point in tail:
        net_by_entry = {team.entry: team.net_points for team in point.teams}
        scores = [net_by_entry.get(team.entry, 0) for team in standings]
        average = sum(scores) / len(scores)
        for team, points in zip(standings, scores):
            form[team.entry].append(FormPoint(
                gameweek=point.gameweek,
                classification=classify(points, average),
                points=points,
                average=average,
            ))
    return form
