"""
transport.py

Pipes a rendered dump message into a command-line mail transport agent
(msmtp by default) and reports whether the agent accepted it.
"""

from __future__ import annotations

import contextlib
import logging
import shlex
import subprocess
import tempfile
import threading
from typing import IO, List, Sequence, Union

from linkdump.errors import TransportExecutionError, TransportSetupError


class MailTransport:
    """Run `<command...> <recipient>` with the message on stdin.

    The agent's exit status is the only success signal: 0 means the message
    was accepted, anything else (or a timeout) is a failure.

    Attributes:
        command: Argument vector of the mail agent, without the recipient.
        timeout: Seconds to wait for the agent before giving up.
        logger: Logger used for debug output.
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]] = "msmtp",
        timeout: float = 60.0,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize a transport.

        Args:
            command: Either a shell-style string (split with `shlex`) or an argv list.
            timeout: Seconds before the agent is killed. Must be > 0.
            logger: Optional logger; defaults to the `linkdump` logger.

        Raises:
            ValueError: If the command is empty or the timeout is not positive.
        """
        argv: List[str] = shlex.split(command) if isinstance(command, str) else list(command)
        if not argv:
            raise ValueError("mail transport command must not be empty")
        if timeout <= 0:
            raise ValueError("timeout must be positive (seconds)")

        self.command: List[str] = argv
        self.timeout: float = timeout
        self.logger: logging.Logger = logger or logging.getLogger("linkdump")

    def send(self, recipient: str, message: str) -> str:
        """Deliver `message` to `recipient`.

        The message is written to the agent's stdin from a helper thread
        while its combined output is spooled to a temporary file.

        Returns:
            The agent's combined stdout and stderr.

        Raises:
            TransportSetupError: If the agent cannot be started.
            TransportExecutionError: If it exits non-zero, times out, or does
                not take the whole message on its stdin (even with exit 0).
        """
        argv = [*self.command, recipient]
        self.logger.debug("Running mailer: %s", shlex.join(argv))
        body = message.encode("utf-8")

        with tempfile.TemporaryFile() as spool:
            try:
                proc = subprocess.Popen(
                    argv,
                    stdin=subprocess.PIPE,
                    stdout=spool,
                    stderr=subprocess.STDOUT,
                )
            except OSError as e:
                raise TransportSetupError(f"cannot start mailer {argv[0]!r}: {e}") from e

            write_errors: List[OSError] = []

            def feed() -> None:
                try:
                    proc.stdin.write(body)
                    proc.stdin.close()
                except OSError as e:
                    write_errors.append(e)
                    with contextlib.suppress(OSError):
                        proc.stdin.close()

            feeder = threading.Thread(target=feed, name="linkdump-mailer-stdin", daemon=True)
            feeder.start()

            try:
                returncode = proc.wait(timeout=self.timeout)
            except subprocess.TimeoutExpired as e:
                proc.kill()
                proc.wait()
                feeder.join(timeout=1)
                raise TransportExecutionError(
                    f"mailer timed out after {self.timeout:g}s",
                    output=_read_spool(spool),
                ) from e

            # agent is gone, so a blocked write has already failed with EPIPE
            feeder.join(timeout=self.timeout)
            output = _read_spool(spool)

        if feeder.is_alive():
            raise TransportExecutionError(
                "mailer exited before taking the whole message",
                returncode=returncode,
                output=output,
            )
        if write_errors:
            raise TransportExecutionError(
                f"I/O error writing message to mailer: {write_errors[0]}",
                returncode=returncode,
                output=output,
            )
        if returncode != 0:
            raise TransportExecutionError(
                f"mailer exited with status {returncode}",
                returncode=returncode,
                output=output,
            )
        return output


def _read_spool(spool: IO[bytes]) -> str:
    spool.seek(0)
    return spool.read().decode("utf-8", errors="replace")
