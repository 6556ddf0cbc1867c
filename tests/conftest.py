import sys
from collections.abc import Callable
from pathlib import Path

import pytest

EXTRACTOR_DIR = Path(__file__).resolve().parent.parent
if str(EXTRACTOR_DIR) not in sys.path:
    sys.path.insert(0, str(EXTRACTOR_DIR))

import vkstructs  # noqa: E402


def _wrap_types(inner_xml: str) -> str:
    return f"<registry><types>{inner_xml}</types></registry>"


@pytest.fixture
def make_registry() -> Callable[[str], str]:
    return _wrap_types


@pytest.fixture
def make_events() -> Callable[[str], list[vkstructs.ParseEvent]]:
    def _make_events(inner_xml: str) -> list[vkstructs.ParseEvent]:
        return list(vkstructs.iter_string_events(_wrap_types(inner_xml)))

    return _make_events


@pytest.fixture
def write_registry(tmp_path: Path) -> Callable[[str], Path]:
    def _write_registry(inner_xml: str) -> Path:
        vk_xml = tmp_path / "vk.xml"
        vk_xml.write_text(_wrap_types(inner_xml) + "\n", encoding="utf-8")
        return vk_xml

    return _write_registry


@pytest.fixture
def fixture_vk_xml() -> Path:
    return EXTRACTOR_DIR / "tests" / "fixtures" / "vk_structs_minimal.xml"


@pytest.fixture
def make_member() -> Callable[..., vkstructs.Member]:
    def _make_member(*, type_name: str, field_name: str, **overrides: object):
        return vkstructs.Member(type_name=type_name, field_name=field_name, **overrides)

    return _make_member
