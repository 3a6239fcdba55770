from __future__ import annotations

import shlex
import subprocess
import sys
from dataclasses import dataclass

from trxpub.core.models import RunResult


@dataclass
class TcmProcessGateway:
    tool_path: str

    def run(self, arguments: str) -> RunResult:
        """Launch tcm.exe, feed it an empty stdin and drain both output streams.

        Notes:
            There is no timeout: tcm's run/publish command is synchronous and a
            hung process hangs the publish.
        """
        proc = subprocess.run(
            self.command_line(arguments),
            input="",
            capture_output=True,
            text=True,
            check=False,
        )
        return RunResult(
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            exit_code=proc.returncode,
        )

    def command_line(self, arguments: str) -> str | list[str]:
        # tcm.exe parses its own command line on Windows, so quoting must survive intact.
        if sys.platform.startswith("win"):
            return f'"{self.tool_path}" {arguments}'
        return [self.tool_path, *shlex.split(arguments)]
