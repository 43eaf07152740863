"""
Flush controller.

Decides whether the queued links may be dumped, builds the dump message,
hands it to the mail transport and commits (drops the delivered links) only
when delivery succeeded. A failed delivery leaves the queue exactly as it
was, so the same links go out with the next dump.

Locking protocol:
  * `_flush_lock` serializes whole flushes (HTTP and signal triggers alike).
  * The queue's own lock is held only while taking the snapshot and while
    committing, never during delivery. Links submitted while the mailer runs
    stay queued and are not part of the in-flight message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable
import logging
import threading

from ..dto import DeliveryResult, DumpMessage, FlushResult, FlushStatus
from ..errors import TransportError, TransportExecutionError
from ..ports import MailTransportPort
from ..settings import FlushConfig
from .queue_store import LinkQueue


@dataclass
class FlushController:
    """
    Gatekeeper between the link queue and the mail transport.

    Attributes:
        queue: Shared link queue.
        config: Threshold and recipient, fixed at startup.
        transport: Anything implementing `MailTransportPort.send`.
        logger: Logger for decisions and delivery diagnostics.
        clock: Returns the dump timestamp; overridable in tests.
    """
    queue: LinkQueue
    config: FlushConfig
    transport: MailTransportPort
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("linkdump"))
    clock: Callable[[], datetime] = field(default=lambda: datetime.now().astimezone())

    _flush_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    # ---------------------------- Public methods ---------------------------

    def flush(self, force: bool = False) -> bool:
        """Dump the queue; True only when the links were delivered and removed."""
        return self.attempt(force).committed

    def attempt(self, force: bool = False) -> FlushResult:
        """
        Run one flush and report why it did or did not commit.

        Order of checks: empty queue, threshold (unless forced), delivery.
        """
        with self._flush_lock:
            snapshot = self.queue.snapshot()
            size = len(snapshot)

            if size == 0:
                self.logger.info("Nothing to dump, link queue is empty")
                return FlushResult(FlushStatus.EMPTY_QUEUE, size)

            if size < self.config.min_links and not force:
                self.logger.info(
                    "Too few links (size %d, minimum %d) to dump", size, self.config.min_links
                )
                return FlushResult(FlushStatus.THRESHOLD_NOT_MET, size)

            self.logger.info("Dumping link queue (size %d) to email", size)
            message = DumpMessage(
                timestamp=self.clock(),
                recipient=self.config.email_addr,
                links=snapshot,
            )
            result = self._deliver(message)

            if not result.ok:
                self.logger.error("Failed to run mailer: %s", result.reason)
                if result.output:
                    self.logger.error("Failed mailer output: %r", result.output)
                self.logger.warning("Failed dump, link queue unchanged")
                return FlushResult(FlushStatus.DELIVERY_FAILED, size)

            remaining = self.queue.commit(size)
            self.logger.info("Successful dump, link queue reset (size %d)", remaining)
            return FlushResult(FlushStatus.COMMITTED, size)

    # --------------------------- Private helpers ---------------------------

    def _deliver(self, message: DumpMessage) -> DeliveryResult:
        """Single delivery attempt; transport errors become a failed result."""
        try:
            output = self.transport.send(message.recipient, message.render())
        except TransportExecutionError as e:
            return DeliveryResult(ok=False, reason=str(e), output=e.output)
        except TransportError as e:
            return DeliveryResult(ok=False, reason=str(e))
        except OSError as e:
            return DeliveryResult(ok=False, reason=f"I/O error: {e}")
        return DeliveryResult(ok=True, output=output or "")
