"""
Thread-safe link queue.

Holds the submitted links in insertion order. The only mutations are
`submit` (append one link) and the flush-side `clear` / `commit` (drop the
links a successful dump delivered). Every read-modify-write runs under one
lock, so concurrent submits get distinct, gap-free positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple
import logging
import threading

from ..errors import BlankSentinel, EmptyLink

BLANK_SENTINEL = "about:blank"


def normalize_link(raw: str) -> str:
    """
    Trim `raw` and validate it as a link.

    Raises:
        EmptyLink: nothing left after trimming.
        BlankSentinel: the link is `about:blank`.
    """
    link = (raw or "").strip()
    if not link:
        raise EmptyLink("empty link is invalid")
    if link == BLANK_SENTINEL:
        raise BlankSentinel(f"{BLANK_SENTINEL} is invalid")
    return link


@dataclass
class LinkQueue:
    """
    Ordered, append-only (until flushed) collection of links.

    Positions are 1-based and follow insertion order, which is also the
    order links appear in listings and dump messages.
    """
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("linkdump"))

    _links: List[str] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    # ------------------------------ Mutations ------------------------------

    def submit(self, raw: str) -> int:
        """Validate and append a link; return its 1-based position."""
        link = normalize_link(raw)
        with self._lock:
            position = len(self._links) + 1
            self.logger.info("Queueing link #%d: %s", position, link)
            self._links.append(link)
            return position

    def clear(self) -> None:
        with self._lock:
            self._links.clear()

    def commit(self, count: int) -> int:
        """
        Drop the first `count` links and return how many remain.

        Only called by the flush controller after a successful delivery of a
        snapshot of exactly `count` links. Links appended after that snapshot
        are kept.
        """
        if count < 0:
            raise ValueError("count must be >= 0")
        with self._lock:
            del self._links[:count]
            return len(self._links)

    # ------------------------------- Reads ---------------------------------

    def snapshot(self) -> Tuple[str, ...]:
        """Consistent copy of the current queue."""
        with self._lock:
            return tuple(self._links)

    def listing(self) -> Iterator[Tuple[int, str]]:
        """Lazily yield (position, link) pairs from a snapshot taken now."""
        links = self.snapshot()
        return enumerate(links, start=1)

    def size(self) -> int:
        with self._lock:
            return len(self._links)

    def __len__(self) -> int:
        return self.size()
