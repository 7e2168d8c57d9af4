"""Caller-side orchestration: fetch signals and benchmark concurrently, then audit."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import replace
from typing import Any

from .config import DEFAULT_LOCALE, PROVIDER_TIMEOUT
from .engine import run_audit
from .models import AuditResult, RawSignals, ReferenceItem
from .phrases import PhraseLookup

logger = logging.getLogger(__name__)


class SignalProvider(ABC):
    """Supplies raw page measurements for one audited URL."""

    name: str = "signals"

    @abstractmethod
    def fetch(self, url: str) -> RawSignals | Mapping[str, Any] | None:
        """Return raw signals for the URL, None when nothing was collected."""
        pass


class BenchmarkProvider(ABC):
    """Supplies competing reference items for a target phrase."""

    name: str = "benchmark"

    @abstractmethod
    def fetch(self, keyword: str | None) -> Iterable[ReferenceItem | Mapping[str, Any]] | None:
        """Return reference items for the phrase, None when unavailable."""
        pass


class StaticSignalProvider(SignalProvider):
    """Serves signals that were collected ahead of time (saved payloads, tests)."""

    name = "static-signals"

    def __init__(self, signals: RawSignals | Mapping[str, Any] | None):
        self.signals = signals

    def fetch(self, url: str) -> RawSignals | Mapping[str, Any] | None:
        return self.signals


class StaticBenchmarkProvider(BenchmarkProvider):
    """Serves a fixed reference set."""

    name = "static-benchmark"

    def __init__(self, items: Iterable[ReferenceItem | Mapping[str, Any]] | None):
        self.items = list(items) if items is not None else None

    def fetch(self, keyword: str | None) -> Iterable[ReferenceItem | Mapping[str, Any]] | None:
        return self.items


def _describe(exc: BaseException, timeout: float) -> str:
    if isinstance(exc, FutureTimeoutError):
        return f"Timeout after {timeout}s"
    return f"Error: {exc}"


def _remaining(deadline: float) -> float:
    return max(0.0, deadline - time.monotonic())


def audit_page(
    url: str,
    signal_provider: SignalProvider,
    benchmark_provider: BenchmarkProvider | None = None,
    keyword: str | None = None,
    locale: str = DEFAULT_LOCALE,
    phrases: PhraseLookup | None = None,
    timeout: float | None = None,
) -> AuditResult:
    """Run a content audit with both providers fetched in parallel.

    A failed or slow benchmark provider only removes the benchmark; a failed
    or slow signal provider yields the no-data result with ``error`` set.
    Nothing is retried here.

    Args:
        url: The audited URL, passed to the signal provider
        signal_provider: Source of the page measurements
        benchmark_provider: Optional source of competing items
        keyword: Optional target phrase
        locale: Locale of the recommendation text
        phrases: Phrase lookup, defaults to the bundled catalogs
        timeout: Seconds both providers share, from submission (default: AUDIT_PROVIDER_TIMEOUT)

    Returns:
        AuditResult from the engine
    """
    timeout = PROVIDER_TIMEOUT if timeout is None else timeout
    signals = None
    benchmark_set = None
    error = None

    deadline = time.monotonic() + timeout
    executor = ThreadPoolExecutor(max_workers=2)
    try:
        signal_future = executor.submit(signal_provider.fetch, url)
        benchmark_future = (
            executor.submit(benchmark_provider.fetch, keyword) if benchmark_provider else None
        )

        try:
            signals = signal_future.result(timeout=_remaining(deadline))
        except Exception as e:
            logger.error("Signal provider %s failed for %s", signal_provider.name, url, exc_info=e)
            error = _describe(e, timeout)

        if benchmark_future is not None and error is None:
            try:
                benchmark_set = benchmark_future.result(timeout=_remaining(deadline))
            except Exception as e:
                logger.warning(
                    "Benchmark provider %s failed for %r, auditing without benchmark: %s",
                    benchmark_provider.name, keyword, _describe(e, timeout),
                )
            if not benchmark_set:
                logger.debug("No benchmark for %r", keyword)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    if error is not None:
        signals = None
    elif isinstance(signals, Mapping) and url and not signals.get("url"):
        signals = {**signals, "url": url}

    result = run_audit(
        signals,
        keyword=keyword,
        benchmark_set=benchmark_set,
        locale=locale,
        phrases=phrases,
    )
    if error is not None:
        result = replace(result, error=error)
    return result
