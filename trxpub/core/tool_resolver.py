from __future__ import annotations

import os
import shutil
import sys

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence


TOOL_ENV_VAR = "TRXPUB_TCM_PATH"

DEFAULT_CANDIDATES = (
    r"C:\Program Files (x86)\Microsoft Visual Studio 11.0\Common7\IDE\TCM.exe",
    r"C:\Program Files\Microsoft Visual Studio 11.0\Common7\IDE\TCM.exe",
)


class ToolResolutionError(RuntimeError):
    """Raised when tcm.exe cannot be located."""


@dataclass(frozen=True)
class ResolvedTool:
    path: str
    source: str


ToolResolver = Callable[[str | None], ResolvedTool]


def resolve_tool_path(
    explicit_path: str | None = None,
    candidates: Sequence[str] = DEFAULT_CANDIDATES,
) -> ResolvedTool:
    """Resolve the tcm.exe location for this host.

    Resolution order:
    1. Explicit path (config file or --tool-path)
    2. TRXPUB_TCM_PATH environment variable
    3. Candidate installation paths, first existing wins
    4. ``tcm`` on PATH
    """
    searched: list[str] = []

    if explicit_path:
        path = Path(explicit_path)
        searched.append(str(path))
        if _is_runnable(path):
            return ResolvedTool(path=str(path), source="explicit")
        raise ToolResolutionError(f"Tool path not runnable: {path}")

    env_path = os.environ.get(TOOL_ENV_VAR)
    if env_path:
        path = Path(env_path)
        searched.append(str(path))
        if _is_runnable(path):
            return ResolvedTool(path=str(path), source="env")

    for candidate in candidates:
        searched.append(candidate)
        if _is_runnable(Path(candidate)):
            return ResolvedTool(path=candidate, source="install")

    on_path = shutil.which("tcm")
    searched.append("PATH:tcm")
    if on_path:
        return ResolvedTool(path=on_path, source="path")

    searched_str = ", ".join(searched)
    raise ToolResolutionError(
        "Unable to locate tcm.exe. "
        f"searched=[{searched_str}]. "
        f"Install Visual Studio Test Professional, pass --tool-path, or set {TOOL_ENV_VAR}."
    )


def candidate_resolver(candidates: Sequence[str]) -> ToolResolver:
    """Build a resolver that searches ``candidates`` instead of the default install paths."""
    def _resolve(explicit_path: str | None = None) -> ResolvedTool:
        return resolve_tool_path(explicit_path, candidates=candidates)

    return _resolve


def _is_runnable(path: Path) -> bool:
    if not path.exists() or not path.is_file():
        return False
    if sys.platform.startswith("win"):
        return True
    return os.access(path, os.X_OK)
