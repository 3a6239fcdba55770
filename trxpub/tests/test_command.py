from trxpub.core import command
from trxpub.core.models import PublishConfig


def _config(**kwargs) -> PublishConfig:
    values = {
        "test_results": r"C:\x\a.trx",
        "collection": "http://tfs:8080/tfs/Default",
        "project": "Shop",
        "build_number": "Shop_20260101.1",
        "build_definition": "Shop-CI",
        "test_suite_id": 5,
        "test_config_id": 2,
    }
    values.update(kwargs)
    return PublishConfig(**values)


def test_publish_copy_path_keeps_directory_and_extension() -> None:
    assert command.publish_copy_path(r"C:\res\run.trx") == r"C:\res\run_TestRunPublish.trx"
    assert command.publish_copy_path("/tmp/out/run.xml") == "/tmp/out/run_TestRunPublish.xml"


def test_publish_copy_path_without_extension() -> None:
    assert command.publish_copy_path(r"C:\my.results\run") == r"C:\my.results\run_TestRunPublish"


def test_result_owner_defaults_to_current_user(monkeypatch) -> None:
    monkeypatch.setattr(command.getpass, "getuser", lambda: "builder")

    assert command.result_owner(_config()) == "builder"
    assert command.result_owner(_config(test_run_result_owner="qa-lead")) == "qa-lead"


def test_build_publish_arguments_without_title() -> None:
    config = _config(test_run_title="")

    args = command.build_publish_arguments(config, 5, r"C:\x\a_TestRunPublish.trx", "builder")

    assert args == (
        "run /publish /suiteid:5 /configid:2 "
        r'/resultsfile:"C:\x\a_TestRunPublish.trx" '
        '/collection:"http://tfs:8080/tfs/Default" /teamproject:"Shop" '
        '/build:"Shop_20260101.1" /builddefinition:"Shop-CI" /resultowner:"builder"'
    )
    assert "/title:" not in args


def test_build_publish_arguments_appends_title() -> None:
    args = command.build_publish_arguments(_config(test_run_title="Nightly"), 7, "a.trx", "builder")

    assert args.endswith(' /resultowner:"builder" /title:"Nightly"')
    assert "/suiteid:7" in args
