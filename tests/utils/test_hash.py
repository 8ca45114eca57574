"""Tests for the learnshelf.utils.hash module."""

import hashlib
from pathlib import Path

import pytest

from learnshelf.utils.hash import path_id


def test_path_id_is_sha256_of_absolute_path(tmp_path: Path) -> None:
    expected = hashlib.sha256(str(tmp_path).encode("utf-8")).hexdigest()

    assert path_id(tmp_path) == expected
    assert len(path_id(tmp_path)) == 64


def test_path_id_is_stable_and_accepts_strings(tmp_path: Path) -> None:
    assert path_id(tmp_path) == path_id(str(tmp_path))
    assert path_id(tmp_path / "a") != path_id(tmp_path / "b")


def test_relative_paths_resolve_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert path_id("course") == path_id(tmp_path / "course")


def test_path_need_not_exist(tmp_path: Path) -> None:
    assert path_id(tmp_path / "missing" / "folder")
