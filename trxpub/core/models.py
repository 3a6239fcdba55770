from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PublishConfig:
    """Settings for one publish of a TRX file to the test-management server."""
    test_results: str
    collection: str
    project: str
    build_number: str
    build_definition: str
    test_suite_id: int | None = None
    try_all_suites: bool = False
    test_config_id: int | None = None
    test_run_title: str | None = None
    test_run_result_owner: str | None = None
    fix_test_ids: bool = False
    tool_path: str | None = None


@dataclass
class RunResult:
    """Captured output of a single tcm.exe invocation."""
    stdout: str
    stderr: str
    exit_code: int


@dataclass
class SuiteOutcome:
    """Exit code of one suite publish and whether it counted toward the verdict."""
    suite_id: int
    exit_code: int
    counted: bool


@dataclass
class PublishOutcome:
    """Verdict of a publish call.

    ``blocked_reason`` is set when the publish never reached the suite loop
    (``invalid_configuration``, ``tool_not_found`` or ``results_not_found``).
    """
    ok: bool
    blocked_reason: str | None = None
    errors: list[str] = field(default_factory=list)
    results_path: str | None = None
    suites: list[SuiteOutcome] = field(default_factory=list)
    exit_code_total: int = 0
