"""BatchOrchestrator: runs many comparisons with per-item failure isolation.

Inline batches run synchronously on the calling thread, in submission order.
URL batches start one asyncio task per item up front; a counting semaphore
bounds how many of them fetch and compare at the same time.  Task handles
are awaited in submission order, so ``BatchResult.results[i]`` always belongs
to ``requests[i]`` whatever order the work completes in.

Any failure of an item (validation, login, fetch, parse, timeout) is logged
and replaced by ``ComparisonResult.placeholder()``; the batch itself never
fails because of one item and never short-circuits.  No retries happen at
this layer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TypeAlias

from xml_compare.comparator import XmlComparator
from xml_compare.config import BatchConfig
from xml_compare.models import CompareRequest, UrlCompareRequest
from xml_compare.protocols import DocumentSource
from xml_compare.result import BatchResult, ComparisonResult
from xml_compare.sources.http import HttpDocumentSource

__all__ = ["BatchOrchestrator"]

logger = logging.getLogger(__name__)

# (result, error description or None)
_Outcome: TypeAlias = tuple[ComparisonResult, str | None]


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class BatchOrchestrator:
    """Runs sequences of comparison requests.

    Args:
        source: Where URL items are fetched from.  When None, each URL call
            opens its own ``HttpDocumentSource`` and closes it afterwards.
        config: Concurrency bound and per-item timeout.  Defaults to
            ``BatchConfig()``.
        comparator: The comparator applied to every item.

    Example::

        orchestrator = BatchOrchestrator()
        batch = orchestrator.run_batch([CompareRequest("<a/>", "<a/>")])
        batch.successful      # 1
    """

    def __init__(
        self,
        source: DocumentSource | None = None,
        config: BatchConfig | None = None,
        comparator: XmlComparator | None = None,
    ) -> None:
        self._source = source
        self._config = config if config is not None else BatchConfig()
        self._comparator = comparator if comparator is not None else XmlComparator()

    # ------------------------------------------------------------------
    # Inline batches
    # ------------------------------------------------------------------

    def run_batch(self, requests: Sequence[CompareRequest]) -> BatchResult:
        """Compare inline document pairs synchronously, in order.

        Raises:
            TypeError: If any item is not a ``CompareRequest`` (URL items need
                ``run_url_batch``).
        """
        for request in requests:
            if not isinstance(request, CompareRequest):
                msg = (
                    "run_batch only accepts CompareRequest items, got "
                    f"{type(request).__name__}; use run_url_batch for URL items"
                )
                raise TypeError(msg)
        outcomes = [
            self._run_inline(index, request) for index, request in enumerate(requests)
        ]
        return self._collect(outcomes)

    def _run_inline(self, index: int, request: CompareRequest) -> _Outcome:
        try:
            return self._comparator.compare_request(request), None
        except Exception as exc:
            logger.warning("Batch item %d failed: %s", index, exc, exc_info=True)
            return ComparisonResult.placeholder(), _describe(exc)

    # ------------------------------------------------------------------
    # URL batches
    # ------------------------------------------------------------------

    async def run_url_batch(
        self,
        requests: Sequence[UrlCompareRequest | CompareRequest],
    ) -> BatchResult:
        """Fetch and compare URL pairs concurrently, preserving input order.

        Inline ``CompareRequest`` items may be mixed in; they are evaluated
        synchronously at their position while URL tasks are scheduled.
        Cancelling this coroutine cancels every outstanding item task.
        """
        if self._source is not None:
            return await self._run_url_batch(requests, self._source)
        async with HttpDocumentSource() as source:
            return await self._run_url_batch(requests, source)

    async def _run_url_batch(
        self,
        requests: Sequence[UrlCompareRequest | CompareRequest],
        source: DocumentSource,
    ) -> BatchResult:
        semaphore = asyncio.Semaphore(self._config.max_concurrency)
        handles: list[asyncio.Task[_Outcome] | _Outcome] = []
        outcomes: list[_Outcome] = []
        try:
            for index, request in enumerate(requests):
                if isinstance(request, CompareRequest):
                    handles.append(self._run_inline(index, request))
                else:
                    handles.append(
                        asyncio.create_task(
                            self._run_url_item(index, request, source, semaphore)
                        )
                    )
            for handle in handles:
                outcomes.append(
                    await handle if isinstance(handle, asyncio.Task) else handle
                )
        finally:
            pending = [
                handle
                for handle in handles
                if isinstance(handle, asyncio.Task) and not handle.done()
            ]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
        return self._collect(outcomes)

    async def _run_url_item(
        self,
        index: int,
        request: UrlCompareRequest,
        source: DocumentSource,
        semaphore: asyncio.Semaphore,
    ) -> _Outcome:
        async with semaphore:
            try:
                if self._config.item_timeout is None:
                    result = await self._compare_urls(request, source)
                else:
                    result = await asyncio.wait_for(
                        self._compare_urls(request, source),
                        timeout=self._config.item_timeout,
                    )
            except Exception as exc:
                logger.warning(
                    "Batch item %d (%s vs %s) failed: %s",
                    index,
                    request.url1,
                    request.url2,
                    _describe(exc),
                    exc_info=True,
                )
                return ComparisonResult.placeholder(), _describe(exc)
        return result, None

    async def compare_urls(self, request: UrlCompareRequest) -> ComparisonResult:
        """Compare a single URL pair; failures propagate as typed errors.

        Raises:
            InvalidUrlError, AuthError, FetchError, ValidationError, ParseError
        """
        if self._source is not None:
            return await self._compare_urls(request, self._source)
        async with HttpDocumentSource() as source:
            return await self._compare_urls(request, source)

    async def _compare_urls(
        self,
        request: UrlCompareRequest,
        source: DocumentSource,
    ) -> ComparisonResult:
        token = request.session_id
        if token is None and request.credentials is not None:
            session = await source.authenticate(
                request.url1,
                request.credentials.username,
                request.credentials.password,
            )
            token = session.token
        xml1 = await source.fetch(request.url1, token)
        xml2 = await source.fetch(request.url2, token)
        return self._comparator.compare(xml1, xml2, request.rules)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    @staticmethod
    def _collect(outcomes: list[_Outcome]) -> BatchResult:
        failed = sum(1 for _, error in outcomes if error is not None)
        batch = BatchResult(
            results=[result for result, _ in outcomes],
            total=len(outcomes),
            successful=len(outcomes) - failed,
            failed=failed,
            errors=[error for _, error in outcomes],
        )
        logger.info(
            "Batch finished: %d total, %d successful, %d failed",
            batch.total,
            batch.successful,
            batch.failed,
        )
        return batch
