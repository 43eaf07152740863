"""
Data Transfer Objects used across the queue-and-flush core.

These are small, immutable and independent of Flask or subprocess.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Tuple

from linkdump.utils import unix_date


# === Dump message ===
@dataclass(frozen=True)
class DumpMessage:
    """One flush worth of links, ready to be piped into the mailer."""
    timestamp: datetime
    recipient: str
    links: Tuple[str, ...]

    @property
    def subject(self) -> str:
        return f"linkdump - {unix_date(self.timestamp)}"

    def enumerate(self) -> Iterator[str]:
        """Yield '1. link', '2. link', ... in queue order."""
        for i, link in enumerate(self.links, start=1):
            yield f"{i}. {link}"

    def render(self) -> str:
        """Headers, blank line, numbered body; each line newline-terminated."""
        lines = [f"Subject: {self.subject}", f"To: {self.recipient}", ""]
        lines.extend(self.enumerate())
        return "\n".join(lines) + "\n"


# === Delivery attempt ===
@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a single delivery attempt; the caller decides commit vs. keep."""
    ok: bool
    reason: str = ""
    output: str = ""  # mailer diagnostics (stdout + stderr)


# === Flush outcome ===
class FlushStatus(str, Enum):
    COMMITTED = "committed"
    EMPTY_QUEUE = "empty_queue"
    THRESHOLD_NOT_MET = "threshold_not_met"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True)
class FlushResult:
    status: FlushStatus
    size: int  # queue size the decision was made against

    @property
    def committed(self) -> bool:
        return self.status is FlushStatus.COMMITTED
