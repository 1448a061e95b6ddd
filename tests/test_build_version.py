from __future__ import annotations

import json
from pathlib import Path

import pytest

from sources.build_version import BUILD_VERSION_SUBPATH, parse_build_version, read_build_version


def _write_build_version(root: Path, payload) -> None:
    path = root / BUILD_VERSION_SUBPATH
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_launcher_build_version(tmp_path):
    _write_build_version(tmp_path, {
        "MajorVersion": 5,
        "MinorVersion": 4,
        "PatchVersion": 3,
        "Changelist": 36610302,
        "CompatibleChangelist": 35576357,
        "IsLicenseeVersion": 0,
        "IsPromotedBuild": 1,
        "BranchName": "++UE5+Release-5.4",
    })
    version = read_build_version(tmp_path)
    assert version is not None
    assert version.version_string == "5.4.3"
    assert version.effective_changelist == 36610302
    assert version.is_promoted_build is True
    assert version.is_licensee_version is False
    assert version.branch_name == "++UE5+Release-5.4"


def test_source_build_falls_back_to_compatible_changelist():
    version = parse_build_version({
        "MajorVersion": 5,
        "MinorVersion": 3,
        "PatchVersion": 2,
        "Changelist": 0,
        "CompatibleChangelist": 29314046,
    })
    assert version.effective_changelist == 29314046


def test_missing_version_fields_rejected():
    with pytest.raises(ValueError):
        parse_build_version({"MajorVersion": 5, "MinorVersion": 3})
    with pytest.raises(ValueError):
        parse_build_version({"MajorVersion": "5", "MinorVersion": 3, "PatchVersion": 0})


def test_unreadable_build_version_returns_none(tmp_path):
    assert read_build_version(tmp_path) is None
    _write_build_version(tmp_path, {"MajorVersion": 5})
    assert read_build_version(tmp_path) is None


def test_malformed_build_version_returns_none(tmp_path):
    path = tmp_path / BUILD_VERSION_SUBPATH
    path.parent.mkdir(parents=True)
    path.write_text("not json", encoding="utf-8")
    assert read_build_version(tmp_path) is None
