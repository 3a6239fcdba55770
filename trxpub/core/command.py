from __future__ import annotations

import getpass

from trxpub.core.models import PublishConfig


PUBLISH_SUFFIX = "_TestRunPublish"


def publish_copy_path(test_results: str) -> str:
    r"""Path of the working copy sent to tcm.exe.

    ``C:\res\run.trx`` becomes ``C:\res\run_TestRunPublish.trx``. Windows
    separators are kept as given so the copy lands beside the original.
    """
    stem, dot, ext = test_results.rpartition(".")
    sep_index = max(test_results.rfind("/"), test_results.rfind("\\"))
    if not dot or len(stem) <= sep_index:
        return f"{test_results}{PUBLISH_SUFFIX}"
    return f"{stem}{PUBLISH_SUFFIX}.{ext}"


def result_owner(config: PublishConfig) -> str:
    return config.test_run_result_owner or getpass.getuser()


def build_publish_arguments(config: PublishConfig, suite_id: int, results_path: str, owner: str) -> str:
    """Argument string for ``tcm run /publish`` against a single suite."""
    args = (
        f"run /publish /suiteid:{suite_id} /configid:{config.test_config_id} "
        f'/resultsfile:"{results_path}" '
        f'/collection:"{config.collection}" /teamproject:"{config.project}" '
        f'/build:"{config.build_number}" /builddefinition:"{config.build_definition}" '
        f'/resultowner:"{owner}"'
    )
    if config.test_run_title:
        args += f' /title:"{config.test_run_title}"'
    return args


def build_suite_list_arguments(collection: str, project: str) -> str:
    return f'suites /list /collection:"{collection}" /teamproject:"{project}"'
