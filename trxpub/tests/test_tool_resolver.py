from pathlib import Path

import pytest

from trxpub.core import tool_resolver


def _make_executable(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o755)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch) -> None:
    monkeypatch.delenv(tool_resolver.TOOL_ENV_VAR, raising=False)
    monkeypatch.setattr(tool_resolver.shutil, "which", lambda *_args: None)


def test_resolve_tool_path_uses_explicit_path(tmp_path) -> None:
    explicit = tmp_path / "TCM.exe"
    _make_executable(explicit)

    resolved = tool_resolver.resolve_tool_path(str(explicit))

    assert resolved.path == str(explicit)
    assert resolved.source == "explicit"


def test_resolve_tool_path_rejects_missing_explicit_path(tmp_path) -> None:
    with pytest.raises(tool_resolver.ToolResolutionError, match="not runnable"):
        tool_resolver.resolve_tool_path(str(tmp_path / "missing.exe"))


def test_resolve_tool_path_uses_environment_override(tmp_path, monkeypatch) -> None:
    binary = tmp_path / "bin" / "tcm"
    _make_executable(binary)
    monkeypatch.setenv(tool_resolver.TOOL_ENV_VAR, str(binary))

    resolved = tool_resolver.resolve_tool_path(candidates=())

    assert resolved.path == str(binary)
    assert resolved.source == "env"


def test_resolve_tool_path_prefers_first_existing_candidate(tmp_path) -> None:
    first = tmp_path / "x86" / "TCM.exe"
    second = tmp_path / "x64" / "TCM.exe"
    _make_executable(second)

    resolved = tool_resolver.resolve_tool_path(candidates=(str(first), str(second)))
    assert resolved.path == str(second)
    assert resolved.source == "install"

    _make_executable(first)
    resolved = tool_resolver.resolve_tool_path(candidates=(str(first), str(second)))
    assert resolved.path == str(first)


def test_resolve_tool_path_falls_back_to_path(monkeypatch) -> None:
    monkeypatch.setattr(tool_resolver.shutil, "which", lambda *_args: "/usr/local/bin/tcm")

    resolved = tool_resolver.resolve_tool_path(candidates=())

    assert resolved.path == "/usr/local/bin/tcm"
    assert resolved.source == "path"


def test_candidate_resolver_injects_host_layout(tmp_path) -> None:
    binary = tmp_path / "tools" / "TCM.exe"
    _make_executable(binary)

    resolve = tool_resolver.candidate_resolver([str(binary)])

    assert resolve(None).path == str(binary)


def test_resolve_tool_path_raises_when_unavailable(tmp_path) -> None:
    with pytest.raises(tool_resolver.ToolResolutionError) as exc:
        tool_resolver.resolve_tool_path(candidates=(str(tmp_path / "TCM.exe"),))

    assert str(tmp_path / "TCM.exe") in str(exc.value)
