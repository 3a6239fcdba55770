from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from trxpub.core.command import build_publish_arguments, publish_copy_path, result_owner
from trxpub.core.config import require_valid, validate_config
from trxpub.core.models import PublishConfig, PublishOutcome, SuiteOutcome
from trxpub.core.suites import fetch_all_suite_ids
from trxpub.core.tool_resolver import ToolResolutionError, ToolResolver, resolve_tool_path
from trxpub.core.trx import fix_test_ids_in_trx, rewrite_test_run_id
from trxpub.ports.tool_gateway import TcmGateway


class TestRunPublisher:
    """Publish a TRX file to one or more test suites through tcm.exe."""

    __test__ = False

    def __init__(
        self,
        gateway_factory: Callable[[str], TcmGateway],
        tool_resolver: ToolResolver = resolve_tool_path,
        rewrite_run_id: Callable[[str], None] = rewrite_test_run_id,
        fix_test_ids: Callable[[str], None] = fix_test_ids_in_trx,
    ) -> None:
        self.gateway_factory = gateway_factory
        self.tool_resolver = tool_resolver
        self.rewrite_run_id = rewrite_run_id
        self.fix_test_ids = fix_test_ids

    def publish(self, config: PublishConfig) -> PublishOutcome:
        """Publish ``config.test_results`` and report an aggregated verdict.

        Args:
            config (PublishConfig): Results file, target suites and build metadata.

        Returns:
            PublishOutcome: ``ok`` is True when the summed exit codes of the
                counted suites is zero. Configuration and tool problems come back
                as ``blocked_reason`` values before any file is touched.

        Notes:
            The working copy is rewritten with a new run id before every suite;
            the server rejects a second submission that carries the same run id.
            In try-all mode suite failures are not counted, since discovery
            returns suites that have nothing to do with this result set.
        """
        errors = validate_config(config)
        if errors:
            return PublishOutcome(ok=False, blocked_reason="invalid_configuration", errors=errors)

        try:
            tool = self.tool_resolver(config.tool_path)
        except ToolResolutionError as exc:
            return PublishOutcome(ok=False, blocked_reason="tool_not_found", errors=[str(exc)])

        if not Path(config.test_results).is_file():
            return PublishOutcome(
                ok=False,
                blocked_reason="results_not_found",
                errors=[f"Test results file not found: {config.test_results}"],
            )

        trx_path = publish_copy_path(config.test_results)
        print(f"Taken copy of results file to update for publish ({trx_path})")
        shutil.copyfile(config.test_results, trx_path)

        if config.fix_test_ids:
            self.fix_test_ids(trx_path)

        gateway = self.gateway_factory(tool.path)
        if config.try_all_suites:
            suite_ids = fetch_all_suite_ids(config, gateway)
        else:
            suite_ids = [config.test_suite_id]

        owner = result_owner(config)
        exit_code_total = 0
        suites: list[SuiteOutcome] = []
        for suite_id in suite_ids:
            print(f"Processing Suite ({suite_id})")
            self.rewrite_run_id(trx_path)

            arguments = build_publish_arguments(config, suite_id, trx_path, owner)
            print(f"Launching tcm.exe {arguments}")
            result = gateway.run(arguments)

            print(result.stdout, end="")
            print(result.stderr, end="")

            counted = not config.try_all_suites
            if counted:
                exit_code_total += result.exit_code
            suites.append(SuiteOutcome(suite_id=suite_id, exit_code=result.exit_code, counted=counted))

        return PublishOutcome(
            ok=exit_code_total == 0,
            results_path=trx_path,
            suites=suites,
            exit_code_total=exit_code_total,
        )


def publish_test_run(config: PublishConfig, publisher: TestRunPublisher) -> bool:
    """Boolean form of ``publisher.publish``.

    Raises:
        ConfigurationError: When the suite or config id is missing, before any
            file or process operation.
    """
    return publisher.publish(require_valid(config)).ok
