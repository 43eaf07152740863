"""
Boundary interfaces (Ports) for the flush controller.

Kept small so tests can swap the real mailer for a fake.
"""

from __future__ import annotations

from typing import Protocol


class MailTransportPort(Protocol):
    """Delivers one rendered message to one recipient."""

    def send(self, recipient: str, message: str) -> str:
        """
        Deliver `message` to `recipient` and return the transport's output.

        Implementations raise `TransportSetupError` when delivery cannot be
        started and `TransportExecutionError` when it was started but failed.
        Returning normally means the message was accepted.
        """
        ...
