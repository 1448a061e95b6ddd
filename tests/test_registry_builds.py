from __future__ import annotations

from contextlib import nullcontext

import pytest

from shared.models.models import InstallRecord
from sources.registry_builds import RegistryBuildsSource


class _FakeReader:
    def __init__(self, values=None, *, fail_open=False, fail_at=None):
        self.values = list(values or [])
        self.fail_open = fail_open
        self.fail_at = fail_at
        self.opened: list[str] = []
        self.calls: list[int] = []

    def open_key(self, key_path):
        self.opened.append(key_path)
        if self.fail_open:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return nullcontext("HKEY")

    def enum_value(self, handle, index):
        assert handle == "HKEY"
        self.calls.append(index)
        if self.fail_at is not None and index == self.fail_at:
            raise PermissionError(5, "Access is denied")
        if index >= len(self.values):
            raise OSError(259, "No more data is available")
        return self.values[index]


def test_values_become_source_records_in_index_order():
    reader = _FakeReader([
        ("{A1B2C3D4-0000-0000-0000-000000000001}", "D:/Src/UE5", 1),
        ("{A1B2C3D4-0000-0000-0000-000000000002}", "D:/Src/UE4", 1),
    ])
    records = RegistryBuildsSource(reader=reader).records()
    assert records == [
        InstallRecord(name="source-0", path="D:/Src/UE5", source="registry"),
        InstallRecord(name="source-1", path="D:/Src/UE4", source="registry"),
    ]
    assert reader.calls == [0, 1, 2]


def test_missing_key_contributes_nothing():
    reader = _FakeReader(fail_open=True)
    assert RegistryBuildsSource("SOFTWARE\\Nope", reader=reader).records() == []
    assert reader.opened == ["SOFTWARE\\Nope"]


def test_enumeration_error_is_normal_termination():
    reader = _FakeReader([("a", "/one", 1), ("b", "/two", 1), ("c", "/three", 1)], fail_at=1)
    records = RegistryBuildsSource(reader=reader).records()
    assert [r.name for r in records] == ["source-0"]


def test_non_string_data_keeps_positional_names():
    reader = _FakeReader([("a", "/one", 1), ("b", 42, 4), ("c", "/three", 1)])
    records = RegistryBuildsSource(reader=reader).records()
    assert [(r.name, r.path) for r in records] == [("source-0", "/one"), ("source-2", "/three")]


def test_names_ignore_value_names():
    reader = _FakeReader([("5.3-custom", "/src", 1)])
    assert RegistryBuildsSource(reader=reader).records()[0].name == "source-0"


def test_no_reader_off_windows(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sources.registry_builds.sys.platform", "linux")
    source = RegistryBuildsSource()
    assert source.reader is None
    assert source.records() == []
