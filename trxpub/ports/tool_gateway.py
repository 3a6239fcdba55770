from __future__ import annotations

from typing import Protocol

from trxpub.core.models import RunResult


class TcmGateway(Protocol):
    """Runner for tcm.exe subcommands."""
    def run(self, arguments: str) -> RunResult:
        """Run tcm.exe with a pre-formatted argument string and wait for it.

        Args:
            arguments (str): Command line after the executable, e.g.
                ``suites /list /collection:"..." /teamproject:"..."``.

        Returns:
            RunResult: Drained stdout/stderr and the process exit code.
        """
        ...
