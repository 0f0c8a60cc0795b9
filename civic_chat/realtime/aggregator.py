"""
Real-Time Aggregator - Fan-out to public government data APIs.

For one user message this module:
1. Picks the sources whose keywords appear in the message
2. Calls the network sources concurrently, each under its own timeout
3. Adds the static notes
4. Assembles whatever succeeded in fixed source order

A failing or slow source only drops its own result. fetch() never
raises.
"""
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Union

import requests

from civic_chat.core.clock import format_display_time, format_rfc3339, local_now
from civic_chat.core.logging_config import get_logger, truncate
from civic_chat.realtime.models import RealTimeBundle, RealTimeResult
from civic_chat.realtime.sources import (
    SOURCES,
    NetworkSource,
    StaticSource,
    needs_augmentation,
)

logger = get_logger(__name__)

NOTE_WITH_RESULTS = "Dados buscados em tempo real de fontes oficiais"
NOTE_WITHOUT_RESULTS = "Consulte os sites oficiais para informações mais detalhadas"

# Extra wait on top of the HTTP timeout before a source is given up
TIMEOUT_GRACE_SECONDS = 0.5

Source = Union[NetworkSource, StaticSource]


class RealTimeAggregator:
    """
    Queries the configured public sources and merges the results.

    Example:
        >>> aggregator = RealTimeAggregator(timeout_seconds=5)
        >>> if aggregator.needs_augmentation("Quem são os senadores atuais?"):
        ...     bundle = aggregator.fetch("Quem são os senadores atuais?")
        >>> bundle.result_count
        1
    """

    def __init__(
        self,
        http_session: Optional[requests.Session] = None,
        timeout_seconds: float = 5.0,
        sources: Sequence[Source] = SOURCES,
        clock: Callable[[], datetime] = local_now
    ):
        """
        Initialize the aggregator.

        Args:
            http_session: Object with a requests-style get(); a new
                requests.Session is created when omitted
            timeout_seconds: Per-source HTTP timeout
            sources: Sources in result order
            clock: Returns the current local time
        """
        self._session = http_session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.sources = tuple(sources)
        self._clock = clock

        logger.info(
            f"RealTimeAggregator initialized: sources={len(self.sources)}, "
            f"timeout={timeout_seconds}s"
        )

    def needs_augmentation(self, text: str) -> bool:
        return needs_augmentation(text)

    def fetch(self, query: str) -> RealTimeBundle:
        """
        Collect live data relevant to the query.

        Returns:
            A bundle with results in source order; empty, with the
            fallback note, when nothing could be fetched
        """
        now = self._clock()
        lowered = query.lower()

        slots: List[Optional[RealTimeResult]] = [None] * len(self.sources)
        network: List[int] = []

        for index, source in enumerate(self.sources):
            if not source.matches(lowered):
                continue
            if isinstance(source, StaticSource):
                slots[index] = source.build_result(now)
            else:
                network.append(index)

        if network:
            self._fetch_network(network, slots, now)

        results = [result for result in slots if result is not None]
        bundle = RealTimeBundle(
            generated_at=format_rfc3339(now),
            generated_at_display=format_display_time(now),
            results=results,
            note=NOTE_WITH_RESULTS if results else NOTE_WITHOUT_RESULTS,
        )

        logger.info(
            f"[REALTIME] {bundle.result_count} result(s) for: {truncate(query)}"
        )
        return bundle

    def close(self) -> None:
        """Close the HTTP session."""
        close = getattr(self._session, "close", None)
        if callable(close):
            close()

    def _fetch_network(
        self,
        indexes: List[int],
        slots: List[Optional[RealTimeResult]],
        now: datetime
    ) -> None:
        """
        Call the given network sources in parallel and fill their slots.

        Each fetch gets its own pool with one thread per source, so a
        source starts immediately and its deadline is never spent queued
        behind other requests.
        """
        executor = ThreadPoolExecutor(
            max_workers=len(indexes),
            thread_name_prefix="realtime-source"
        )
        try:
            pending: Dict[Future, int] = {
                executor.submit(self._fetch_source, self.sources[index], now): index
                for index in indexes
            }
            done, not_done = wait(
                pending, timeout=self.timeout_seconds + TIMEOUT_GRACE_SECONDS
            )
            for future in not_done:
                future.cancel()
                logger.warning(
                    f"Source {self.sources[pending[future]].name} timed out, skipping"
                )
            for future in done:
                slots[pending[future]] = self._result_of(future, pending[future])
        finally:
            # Stragglers finish in the background; their results are discarded
            executor.shutdown(wait=False)

    def _result_of(self, future: Future, index: int) -> Optional[RealTimeResult]:
        try:
            return future.result()
        except Exception as e:
            logger.error(f"Source {self.sources[index].name} failed unexpectedly: {e}")
            return None

    def _fetch_source(self, source: NetworkSource, now: datetime) -> Optional[RealTimeResult]:
        """
        Call one network source.

        Returns:
            The source's result, or None on timeout, HTTP error,
            undecodable body or empty payload
        """
        url = source.build_url(now)
        try:
            response = self._session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
            if response.status_code != 200:
                logger.warning(
                    f"Source {source.name} returned status {response.status_code}"
                )
                return None
            body = response.json()
        except requests.RequestException as e:
            logger.warning(f"Source {source.name} request failed: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Source {source.name} returned invalid JSON: {e}")
            return None

        items = source.extract_items(body)
        if not items:
            logger.debug(f"Source {source.name} returned no items")
            return None

        return source.build_result(items)
