"""
FPL Payload Validation Module

Structural checks on upstream JSON before it is turned into domain models.
Anything that would make the standings or a history unusable is an error;
recoverable oddities are reported as warnings.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of payload validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def fail(self, message: str) -> 'ValidationResult':
        self.errors.append(message)
        self.is_valid = False
        return self


class PayloadValidator:
    """Validates FPL standings and entry-history payloads."""

    STANDING_NUMERIC_FIELDS = ['rank', 'total', 'event_total']
    HISTORY_NUMERIC_FIELDS = ['total_points', 'points', 'event_transfers_cost']

    @classmethod
    def validate_standings(cls, payload: Any) -> ValidationResult:
        """
        Validate a ``/leagues-classic/{id}/standings/`` body.

        Args:
            payload: Decoded JSON body

        Returns:
            ValidationResult; invalid when no team rows can be read
        """
        result = ValidationResult()

        if not isinstance(payload, dict):
            return result.fail("Standings payload is not an object")

        standings = payload.get('standings')
        if not isinstance(standings, dict) or not isinstance(standings.get('results'), list):
            return result.fail("Missing 'standings.results' list")

        results = standings['results']
        if not results:
            return result.fail("League has no teams")

        if not isinstance(payload.get('league'), dict) or not payload['league'].get('name'):
            result.warnings.append("Missing league name")

        seen = set()
        for i, row in enumerate(results):
            if not isinstance(row, dict):
                result.fail(f"Team {i} is not an object")
                continue
            if not cls._is_integer(row.get('entry')):
                result.fail(f"Team {i}: invalid entry id: {row.get('entry')!r}")
            elif row['entry'] in seen:
                result.fail(f"Team {i}: duplicate entry id {row['entry']}")
            else:
                seen.add(row['entry'])
            for name in cls.STANDING_NUMERIC_FIELDS:
                if name in row and row[name] is not None and not cls._is_integer(row[name]):
                    result.fail(f"Team {i}: invalid {name}: {row[name]!r}")

        return result

    @classmethod
    def validate_history(cls, payload: Any) -> ValidationResult:
        """Validate a ``/entry/{id}/history/`` body."""
        result = ValidationResult()

        if not isinstance(payload, dict) or not isinstance(payload.get('current'), list):
            return result.fail("Missing 'current' list")

        events = set()
        for i, row in enumerate(payload['current']):
            if not isinstance(row, dict):
                result.fail(f"Gameweek row {i} is not an object")
                continue
            event = row.get('event')
            if not cls._is_integer(event) or event < 1:
                result.fail(f"Gameweek row {i}: invalid event: {event!r}")
                continue
            if event in events:
                result.fail(f"Gameweek row {i}: duplicate event {event}")
            events.add(event)
            for name in cls.HISTORY_NUMERIC_FIELDS:
                if name in row and row[name] is not None and not cls._is_integer(row[name]):
                    result.fail(f"Gameweek {event}: invalid {name}: {row[name]!r}")

        if not payload['current']:
            result.warnings.append("History has no gameweeks")

        return result

    @staticmethod
    def _is_integer(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    @staticmethod
    def log_result(context: str, result: ValidationResult) -> None:
        for warning in result.warnings:
            logger.warning(f"{context}: {warning}")
        for error in result.errors:
            logger.error(f"{context}: {error}")
