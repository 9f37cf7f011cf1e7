"""
FPL league fetch orchestration.

Fetches a classic league's standings and then each team's gameweek history,
one request at a time with fixed pauses in between. A team whose history
cannot be fetched is left out rather than failing the whole league.
"""

import logging
from typing import List, Optional

from utils.cache import FileStore, ResponseCache
from utils.constants import HISTORY_PATH, STANDINGS_PATH
from .config import FPLConfig, get_config
from .errors import AllProxiesFailedError, InvalidLeagueDataError, OrchestrationError
from .models import LeagueData, LeagueSnapshot, TeamHistory, TeamStanding
from .rate_limiter import ProxyFallback, RequestPacer, RetryPolicy, Sleep
from .transport import Transport
from .validators import PayloadValidator

logger = logging.getLogger(__name__)


class LeagueFetchOrchestrator:
    """Sequences the standings request and the per-team history requests."""

    def __init__(self, fetcher: ProxyFallback, pacer: Optional[RequestPacer] = None,
                 cache: Optional[ResponseCache] = None, base_url: Optional[str] = None):
        """
        Initialize the orchestrator.

        Args:
            fetcher: Proxy fallback used for every upstream request
            pacer: Inter-request delays (defaults to 1s settle, 2s per team)
            cache: Optional response cache; None disables caching
            base_url: Upstream API base URL
        """
        self.fetcher = fetcher
        self.pacer = pacer or RequestPacer()
        self.cache = cache
        self.base_url = (base_url or get_config().base_url).rstrip("/")

    @classmethod
    def from_config(cls, config: Optional[FPLConfig] = None,
                    sleep: Optional[Sleep] = None) -> 'LeagueFetchOrchestrator':
        """Wire transport, retry, proxies, pacing and cache from configuration."""
        config = config or get_config()
        config.validate()

        transport = Transport(timeout=config.request_timeout)
        retry_policy = RetryPolicy(config.max_attempts, config.retry_delay, sleep=sleep)
        fetcher = ProxyFallback(transport, config.proxies, retry_policy)
        pacer = RequestPacer(config.settle_delay, config.team_delay, sleep=sleep)

        cache = None
        if config.cache_enabled:
            store = FileStore(config.cache_dir) if config.cache_dir else None
            cache = ResponseCache(store, ttl_seconds=config.cache_ttl_seconds)

        return cls(fetcher, pacer=pacer, cache=cache, base_url=config.base_url)

    def standings_url(self, league_id) -> str:
        return self.base_url + STANDINGS_PATH.format(league_id=league_id)

    def history_url(self, entry) -> str:
        return self.base_url + HISTORY_PATH.format(entry=entry)

    async def fetch_league_data(self, league_id, force_refresh: bool = False) -> LeagueData:
        """
        Fetch standings and every team's history for a league.

        Args:
            league_id: Classic league identifier
            force_refresh: Skip the cache lookup (a complete result is still cached)

        Returns:
            LeagueData with histories in standings order, minus skipped teams

        Raises:
            OrchestrationError: If the standings could not be fetched or read
        """
        if self.cache is not None and not force_refresh:
            cached = self.cache.get(league_id)
            if cached is not None:
                return cached

        logger.info(f"Fetching league data for ID: {league_id}")
        snapshot = await self._fetch_standings(league_id)
        logger.info(f"Fetched standings for '{snapshot.league_name}' "
                    f"({len(snapshot.standings)} teams)")

        await self.pacer.settle()

        teams_history: List[TeamHistory] = []
        for team in snapshot.standings:
            await self.pacer.before_team()
            history = await self._fetch_team_history(team)
            if history is not None:
                teams_history.append(history)

        result = LeagueData(snapshot=snapshot, teams_history=tuple(teams_history))
        omitted = result.omitted_entries
        if omitted:
            logger.warning(f"League {league_id}: {len(omitted)} teams omitted: {omitted}")

        if self.cache is not None:
            if omitted or not any(team.last_gameweek >= 1 for team in result.teams_history):
                logger.info(f"League {league_id}: incomplete result not cached")
            else:
                self.cache.put(league_id, result)
        return result

    def close(self) -> None:
        """Release the transport's connection pool."""
        self.fetcher.transport.close()

    async def _fetch_standings(self, league_id) -> LeagueSnapshot:
        try:
            payload = await self.fetcher.fetch_via_any_proxy(self.standings_url(league_id))
        except AllProxiesFailedError as e:
            raise OrchestrationError(f"Failed to fetch standings for league {league_id}: {e}") from e

        validation = PayloadValidator.validate_standings(payload)
        PayloadValidator.log_result(f"League {league_id} standings", validation)
        if not validation.is_valid:
            cause = InvalidLeagueDataError("; ".join(validation.errors))
            raise OrchestrationError(f"Invalid standings for league {league_id}: {cause}") from cause

        return LeagueSnapshot.from_api(league_id, payload)

    async def _fetch_team_history(self, team: TeamStanding) -> Optional[TeamHistory]:
        """Fetch one team's history, returning None if the team must be skipped."""
        try:
            payload = await self.fetcher.fetch_via_any_proxy(self.history_url(team.entry))
        except AllProxiesFailedError as e:
            logger.warning(f"Skipping {team.entry_name} ({team.entry}): {e}")
            return None

        validation = PayloadValidator.validate_history(payload)
        PayloadValidator.log_result(f"History for {team.entry_name}", validation)
        if not validation.is_valid:
            logger.warning(f"Skipping {team.entry_name} ({team.entry}): invalid history")
            return None

        logger.info(f"Successfully fetched history for {team.entry_name}")
        return TeamHistory.from_api(team, payload)
