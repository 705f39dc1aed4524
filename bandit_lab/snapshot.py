"""Snapshot wire format and the openers that fetch it.

A snapshot is a single line of whitespace separated tokens::

    <arms> <mean_1> ... <mean_arms> <count_1> ... <count_arms>

for example ``2 0.100000 0.500000 10 4``.
"""

from __future__ import annotations

import io
import logging
import queue
from dataclasses import dataclass
from pathlib import Path
from typing import IO, BinaryIO, Callable, Protocol, Union

import numpy as np
import requests

from bandit_lab.counters import Counters
from bandit_lab.errors import SnapshotError

logger = logging.getLogger(__name__)

SnapshotSource = Callable[[], Union[Counters, None]]


def format_snapshot(counters: Counters) -> str:
    means = [f"{float(value):f}" for value in counters.values]
    counts = [str(int(count)) for count in counters.counts]
    return " ".join([str(counters.arms), *means, *counts])


def parse_snapshot(
    source: str | bytes | IO[str] | IO[bytes],
    seed: int | None = None,
) -> Counters:
    raw = source.read() if hasattr(source, "read") else source
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"snapshot is not valid utf-8: {exc}") from exc

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise SnapshotError("empty snapshot")
    if len(lines) > 1:
        raise SnapshotError(f"snapshot must be a single line, got {len(lines)}")

    fields = lines[0].split()
    try:
        arms = int(fields[0])
    except ValueError as exc:
        raise SnapshotError(f"arms not an int: {fields[0]}") from exc
    if arms < 1:
        raise SnapshotError("snapshot needs at least 1 arm")
    if len(fields) != 1 + 2 * arms:
        raise SnapshotError(f"expected {2 * arms} values for {arms} arms, got {len(fields) - 1}")

    try:
        means = [float(token) for token in fields[1 : arms + 1]]
    except ValueError as exc:
        raise SnapshotError(f"rewards malformed: {exc}") from exc
    try:
        counts = [int(token) for token in fields[arms + 1 :]]
    except ValueError as exc:
        raise SnapshotError(f"counts malformed: {exc}") from exc
    if any(count < 0 for count in counts):
        raise SnapshotError("counts must be non-negative")

    counters = Counters.new(arms, seed=seed)
    counters.values = np.asarray(means, dtype=np.float64)
    counters.counts = np.asarray(counts, dtype=np.int_)
    return counters


def write_snapshot(path: str | Path, counters: Counters) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_snapshot(counters) + "\n", encoding="utf-8")


class Opener(Protocol):
    def open(self) -> BinaryIO:
        ...


@dataclass(slots=True)
class FileOpener:
    path: str

    def open(self) -> BinaryIO:
        logger.debug("opening snapshot file %s", self.path)
        return Path(self.path).open("rb")


@dataclass(slots=True)
class HTTPOpener:
    url: str
    timeout: float = 10.0

    def open(self) -> BinaryIO:
        logger.debug("fetching snapshot from %s", self.url)
        try:
            resp = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SnapshotError(f"http GET failed: {exc}") from exc
        if resp.status_code != requests.codes.ok:
            raise SnapshotError(f"http GET not 200: {resp.status_code}")
        return io.BytesIO(resp.content)


def new_opener(ref: str, timeout: float = 10.0) -> FileOpener | HTTPOpener:
    if ref.startswith(("http://", "https://")):
        return HTTPOpener(url=ref, timeout=timeout)
    return FileOpener(path=ref)


def fetch_snapshot(opener: Opener, seed: int | None = None) -> Counters:
    try:
        stream = opener.open()
    except OSError as exc:
        raise SnapshotError(f"could not open snapshot: {exc}") from exc
    with stream:
        return parse_snapshot(stream, seed=seed)


@dataclass(slots=True)
class SnapshotPoller:
    """Fetches a fresh snapshot through ``opener`` on every call."""

    opener: Opener
    seed: int | None = None

    def __call__(self) -> Counters:
        return fetch_snapshot(self.opener, seed=self.seed)


@dataclass(slots=True)
class QueueSource:
    """Reads snapshots pushed onto a queue by an external producer.

    Returns None when nothing arrived within ``timeout`` seconds.
    """

    snapshots: "queue.Queue[Counters]"
    timeout: float = 0.5

    def __call__(self) -> Counters | None:
        try:
            return self.snapshots.get(timeout=self.timeout)
        except queue.Empty:
            return None
