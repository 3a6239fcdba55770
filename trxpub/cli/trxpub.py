from __future__ import annotations

"""trxpub command-line interface entrypoint."""

import argparse
import os
import sys

from trxpub.adapters.tcm_gateway import TcmProcessGateway
from trxpub.core.command import build_suite_list_arguments
from trxpub.core.config import ConfigurationError, config_from_mapping, load_config
from trxpub.core.publisher import TestRunPublisher
from trxpub.core.suites import parse_suite_ids
from trxpub.core.tool_resolver import ToolResolutionError, resolve_tool_path
from trxpub.core.version import get_trxpub_version


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean from the environment with a safe default."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes"}


def _publish_overrides(args: argparse.Namespace) -> dict:
    overrides = {
        "test_results": args.results,
        "test_suite_id": args.suite_id,
        "try_all_suites": args.try_all_suites,
        "test_config_id": args.config_id,
        "collection": args.collection,
        "project": args.project,
        "build_number": args.build,
        "build_definition": args.build_definition,
        "test_run_title": args.title,
        "test_run_result_owner": args.owner,
        "fix_test_ids": args.fix_test_ids,
        "tool_path": args.tool_path,
    }
    # An explicit suite on the command line replaces try-all from a config file.
    if args.suite_id is not None:
        overrides["try_all_suites"] = False
    if args.fix_test_ids is None and _env_bool("TRXPUB_FIX_TEST_IDS", False):
        overrides["fix_test_ids"] = True
    return overrides


def publish_command(args: argparse.Namespace) -> int:
    """Publish a TRX file and map the verdict to an exit code."""
    overrides = _publish_overrides(args)
    try:
        if args.config:
            config = load_config(args.config, overrides)
        else:
            config = config_from_mapping(overrides)
    except (ConfigurationError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    publisher = TestRunPublisher(gateway_factory=TcmProcessGateway, tool_resolver=resolve_tool_path)
    outcome = publisher.publish(config)
    if outcome.blocked_reason:
        print(f"Publish blocked: {outcome.blocked_reason}", file=sys.stderr)
        for error in outcome.errors:
            print(error, file=sys.stderr)
        return 2

    suite_list = ",".join(str(item.suite_id) for item in outcome.suites) or "none"
    print(
        "Publish complete: "
        f"ok={str(outcome.ok).lower()} suites={suite_list} "
        f"exit_code_total={outcome.exit_code_total} results={outcome.results_path}"
    )
    return 0 if outcome.ok else 1


def suites_command(args: argparse.Namespace) -> int:
    """List the suite ids tcm.exe reports for a team project."""
    try:
        tool = resolve_tool_path(args.tool_path)
    except ToolResolutionError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    gateway = TcmProcessGateway(tool.path)
    result = gateway.run(build_suite_list_arguments(args.collection, args.project))
    if result.exit_code != 0:
        print(result.stderr or result.stdout, file=sys.stderr, end="")
        return 1
    for suite_id in parse_suite_ids(result.stdout):
        print(suite_id)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint and command registration."""
    parser = argparse.ArgumentParser(prog="trxpub")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_trxpub_version()}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    publish_parser = subparsers.add_parser("publish", help="Publish a TRX file to test suites")
    publish_parser.add_argument("--config", default=None, help="Path to a YAML or JSON publish config")
    publish_parser.add_argument("--results", default=None, help="Path to the .trx results file")
    suite_group = publish_parser.add_mutually_exclusive_group()
    suite_group.add_argument("--suite-id", type=int, default=None, help="Target test suite id")
    suite_group.add_argument(
        "--try-all-suites",
        action="store_true",
        default=None,
        help="Publish to every suite in the project, ignoring per-suite failures",
    )
    publish_parser.add_argument("--config-id", type=int, default=None, help="Test configuration id")
    publish_parser.add_argument("--collection", default=None, help="Team project collection URL")
    publish_parser.add_argument("--project", default=None, help="Team project name")
    publish_parser.add_argument("--build", default=None, help="Build number")
    publish_parser.add_argument("--build-definition", default=None, help="Build definition name")
    publish_parser.add_argument("--title", default=None, help="Test run title")
    publish_parser.add_argument("--owner", default=None, help="Result owner (defaults to current user)")
    publish_parser.add_argument(
        "--fix-test-ids",
        action="store_true",
        default=None,
        help="Normalize unit test ids to MSTest name-based ids before publishing",
    )
    publish_parser.add_argument("--tool-path", default=None, help="Path to tcm.exe")
    publish_parser.set_defaults(func=publish_command)

    suites_parser = subparsers.add_parser("suites", help="List suite ids for a team project")
    suites_parser.add_argument("--collection", required=True, help="Team project collection URL")
    suites_parser.add_argument("--project", required=True, help="Team project name")
    suites_parser.add_argument("--tool-path", default=None, help="Path to tcm.exe")
    suites_parser.set_defaults(func=suites_command)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
