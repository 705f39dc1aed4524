from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from types import TracebackType

from bandit_lab.counters import Counters
from bandit_lab.errors import ConfigurationError, SnapshotError
from bandit_lab.snapshot import SnapshotSource
from bandit_lab.strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DelayedStrategy:
    """Wraps a strategy whose statistics come only from external snapshots.

    Local reward feedback is ignored. A background thread calls ``source``
    every ``poll_interval`` seconds and replaces the wrapped strategy's
    counters with the result. A failed fetch is logged and the previous
    snapshot stays in effect. ``source`` may return None to signal that no
    new snapshot is available yet.
    """

    strategy: Strategy
    source: SnapshotSource
    poll_interval: float = 60.0
    refreshes: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _stop: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.poll_interval < 0.0:
            raise ConfigurationError("poll_interval must be non-negative")

        try:
            snapshot = self.source()
        except Exception as exc:
            raise SnapshotError(f"could not read initial snapshot: {exc}") from exc
        if snapshot is None:
            raise SnapshotError("snapshot source returned no initial snapshot")
        self.init(snapshot)

        self._thread = threading.Thread(
            target=self._refresh_loop,
            name=f"delayed-refresh-{self.strategy}",
            daemon=True,
        )
        self._thread.start()

    @property
    def arms(self) -> int:
        return self.strategy.arms

    @property
    def counters(self) -> Counters:
        return self.strategy.counters

    @property
    def running(self) -> bool:
        return not self._stop.is_set() and self._thread is not None and self._thread.is_alive()

    def _refresh_loop(self) -> None:
        while not self._stop.wait(self.poll_interval):
            try:
                snapshot = self.source()
            except Exception as exc:
                logger.warning("could not fetch snapshot for %s: %s", self, exc)
                continue
            if self._stop.is_set():
                break
            if snapshot is None:
                continue

            try:
                self.init(snapshot)
            except ConfigurationError as exc:
                logger.warning("rejected snapshot for %s: %s", self, exc)
                continue
            logger.debug("applied snapshot #%d to %s", self.refreshes, self)

    def select_arm(self) -> int:
        return self.strategy.select_arm()

    def update(self, arm: int, reward: float) -> None:
        pass

    def init(self, snapshot: Counters) -> None:
        with self._lock:
            self.strategy.init(snapshot)
            self.refreshes += 1

    def reset(self) -> None:
        with self._lock:
            self.strategy.reset()

    def close(self, timeout: float | None = 1.0) -> None:
        """Stops the refresh loop and waits up to ``timeout`` seconds for it.

        A thread still blocked inside ``source`` is left to finish on its own
        and discards whatever it returns.
        """
        self._stop.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.debug("refresh thread for %s still blocked in source", self)

    def __enter__(self) -> "DelayedStrategy":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"Delayed({self.strategy})"


@dataclass(slots=True)
class SimulatedDelayedStrategy:
    """Delayed strategy double for simulations and tests.

    Rewards accumulate in a local ``Counters`` and are pushed into the wrapped
    strategy every ``limit`` updates, which approximates what a delayed
    strategy sees in production without any I/O. A fresh or reset wrapper
    flushes on its first update.
    """

    strategy: Strategy
    limit: int
    accumulator: Counters = field(init=False, repr=False)
    pending: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ConfigurationError("limit must be at least 1")
        self.accumulator = Counters.new(self.strategy.arms, rng=self.strategy.counters.rng)
        self.pending = self.limit

    @property
    def arms(self) -> int:
        return self.strategy.arms

    @property
    def counters(self) -> Counters:
        return self.strategy.counters

    def select_arm(self) -> int:
        return self.strategy.select_arm()

    def update(self, arm: int, reward: float) -> None:
        with self._lock:
            self.accumulator.update(arm, reward)
            self.pending += 1
            if self.pending >= self.limit:
                self.strategy.init(self.accumulator.copy())
                self.pending = 0

    def init(self, snapshot: Counters) -> None:
        with self._lock:
            self.accumulator.init(snapshot)
            self.strategy.init(snapshot)
            self.pending = 0

    def reset(self) -> None:
        with self._lock:
            self.accumulator.reset()
            self.strategy.reset()
            self.pending = self.limit

    def __str__(self) -> str:
        return f"SimulatedDelayed({self.strategy}, limit={self.limit})"
