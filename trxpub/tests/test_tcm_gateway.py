import sys
from pathlib import Path

import pytest

from trxpub.adapters import tcm_gateway
from trxpub.adapters.tcm_gateway import TcmProcessGateway


pytestmark = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses a POSIX shell stand-in for tcm.exe")


def _make_tool(path: Path, body: str) -> str:
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(0o755)
    return str(path)


def test_run_captures_output_and_exit_code(tmp_path) -> None:
    tool = _make_tool(
        tmp_path / "tcm",
        "for arg in \"$@\"; do printf '%s\\n' \"$arg\"; done\necho \"warning\" >&2\nexit 3",
    )

    result = TcmProcessGateway(tool).run('run /publish /suiteid:5 /resultsfile:"C:\\x\\a b.trx" /title:"Nightly run"')

    assert result.exit_code == 3
    assert result.stdout.splitlines() == [
        "run",
        "/publish",
        "/suiteid:5",
        "/resultsfile:C:\\x\\a b.trx",
        "/title:Nightly run",
    ]
    assert result.stderr == "warning\n"


def test_run_feeds_empty_stdin(tmp_path) -> None:
    tool = _make_tool(tmp_path / "tcm", 'cat\necho "done"')

    result = TcmProcessGateway(tool).run("suites /list")

    assert result.stdout == "done\n"
    assert result.exit_code == 0


def test_command_line_keeps_quoting_on_windows(monkeypatch) -> None:
    monkeypatch.setattr(tcm_gateway.sys, "platform", "win32")

    gateway = TcmProcessGateway(r"C:\Program Files\Microsoft Visual Studio 11.0\Common7\IDE\TCM.exe")

    assert gateway.command_line('suites /list /teamproject:"Shop"') == (
        r'"C:\Program Files\Microsoft Visual Studio 11.0\Common7\IDE\TCM.exe" suites /list /teamproject:"Shop"'
    )
