from __future__ import annotations

import hashlib
import re
import uuid
from pathlib import Path


_TEST_RUN_ID = re.compile(r'(<TestRun\b[^>]*?\sid=")([^"]*)(")', re.DOTALL)
_UNIT_TEST = re.compile(r'<UnitTest\b(?P<attrs>[^>]*)>(?P<body>.*?)</UnitTest>', re.DOTALL)
_ATTR_ID = re.compile(r'\sid="([^"]+)"')
_TEST_METHOD = re.compile(r'<TestMethod\b[^>]*>', re.DOTALL)
_CLASS_NAME = re.compile(r'\sclassName="([^"]+)"')
_METHOD_NAME = re.compile(r'\sname="([^"]+)"')


def change_test_run_id(document: str) -> str:
    """Give the TestRun element a fresh id so the server sees a new run.

    Only the root ``<TestRun id="...">`` attribute changes.
    """
    new_id = str(uuid.uuid4())
    return _TEST_RUN_ID.sub(lambda match: f"{match.group(1)}{new_id}{match.group(3)}", document, count=1)


def rewrite_test_run_id(path: str) -> None:
    trx_path = Path(path)
    document = trx_path.read_text(encoding="utf-8-sig")
    trx_path.write_text(change_test_run_id(document), encoding="utf-8")


def fix_test_ids_in_trx(path: str) -> None:
    """Normalize unit-test ids in place to the ids MSTest derives from test names.

    Results produced by other runners carry arbitrary test ids, which breaks the
    association with test cases on the server.
    """
    trx_path = Path(path)
    document = trx_path.read_text(encoding="utf-8-sig")
    trx_path.write_text(fix_test_ids(document), encoding="utf-8")


def fix_test_ids(document: str) -> str:
    mapping: dict[str, str] = {}
    for match in _UNIT_TEST.finditer(document):
        id_match = _ATTR_ID.search(match.group("attrs"))
        method_match = _TEST_METHOD.search(match.group("body"))
        if id_match is None or method_match is None:
            continue
        class_match = _CLASS_NAME.search(method_match.group(0))
        name_match = _METHOD_NAME.search(method_match.group(0))
        if class_match is None or name_match is None:
            continue
        mapping[id_match.group(1)] = mstest_id(class_match.group(1), name_match.group(1))

    mapping = {old_id: new_id for old_id, new_id in mapping.items() if old_id != new_id}
    if not mapping:
        return document
    # One pass, so an id produced for one test is never remapped as another test's old id.
    pattern = re.compile('"(' + "|".join(re.escape(old_id) for old_id in mapping) + ')"')
    return pattern.sub(lambda match: f'"{mapping[match.group(1)]}"', document)


def mstest_id(class_name: str, method_name: str) -> str:
    """MSTest's name-based test id: SHA-1 of the UTF-16LE qualified name as a GUID."""
    # className may carry an assembly-qualified suffix: "Ns.Class, Assembly, Version=..."
    qualified = f"{class_name.split(',', 1)[0].strip()}.{method_name}"
    digest = hashlib.sha1(qualified.encode("utf-16-le")).digest()
    return str(uuid.UUID(bytes_le=digest[:16]))
