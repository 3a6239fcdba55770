from __future__ import annotations

import re

from trxpub.core.command import build_suite_list_arguments
from trxpub.core.models import PublishConfig
from trxpub.ports.tool_gateway import TcmGateway


_SUITE_ID = re.compile(r"^(\d{1,99})(?=\s|$)")


def parse_suite_ids(output: str) -> list[int]:
    """Extract suite ids from ``tcm suites /list`` output.

    A line counts when it starts with a digit run followed by whitespace or
    the end of the line; headers, separators and blank lines are skipped.
    Order is preserved and duplicates are kept.
    """
    suite_ids: list[int] = []
    for line in output.split("\n"):
        match = _SUITE_ID.match(line)
        if match:
            suite_ids.append(int(match.group(1)))
    return suite_ids


def fetch_all_suite_ids(config: PublishConfig, gateway: TcmGateway) -> list[int]:
    result = gateway.run(build_suite_list_arguments(config.collection, config.project))
    return parse_suite_ids(result.stdout)
