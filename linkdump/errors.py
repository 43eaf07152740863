"""
Exception hierarchy for linkdump.

Validation errors are raised by the queue and answered with a 400 by the
HTTP layer. Transport errors are raised by the mail transport and reduced
to a failed delivery by the flush controller; they never escape a flush.
"""

from __future__ import annotations


class LinkdumpError(Exception):
    """Base class for all linkdump errors."""


# ------------------------------ Validation ------------------------------

class ValidationError(LinkdumpError, ValueError):
    """A submitted link was rejected; the queue is unchanged."""

    reason = "invalid link"


class EmptyLink(ValidationError):
    reason = "empty link is invalid"


class BlankSentinel(ValidationError):
    reason = "about:blank is invalid"


# ------------------------------ Transport -------------------------------

class TransportError(LinkdumpError):
    """Delivery of a dump message failed."""


class TransportSetupError(TransportError):
    """The mail program could not be started."""


class TransportExecutionError(TransportError):
    """
    The mail program ran but did not accept the message.

    Attributes:
        returncode: Exit status of the mailer, or None on timeout / I/O error.
        output: Combined stdout + stderr captured from the mailer.
    """

    def __init__(self, message: str, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output
