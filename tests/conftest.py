"""Shared fixtures for the learnshelf test suite."""

import os
from pathlib import Path
from typing import Callable, Generator

import pytest

from learnshelf.utils import config as cfg

MakeFile = Callable[..., Path]


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point the settings store at a throwaway directory for every test.

    Also clears LEARNSHELF_* environment variables so a developer's own
    settings never leak into the suite.
    """
    config_dir = tmp_path_factory.mktemp("config") / "learnshelf"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    for name in list(os.environ):
        if name.startswith("LEARNSHELF_"):
            monkeypatch.delenv(name)
    yield config_dir


@pytest.fixture
def make_file() -> MakeFile:
    """Return a helper creating a file (and its parents) of a given size."""

    def _make(path: Path, size: int = 0, content: bytes | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else b"x" * size)
        return path

    return _make


@pytest.fixture
def library(tmp_path: Path, make_file: MakeFile) -> Path:
    """Create a small learning library.

    Layout::

        lib/
          Course-A/notes.pdf              10 000 B
          Course-A/audio/lec1.mp3        500 000 B
          Course-B/b1.docx                   200 B
          Course-B/b2.PDF                    300 B
          Course-B/Readme.txt
          Course-B/Part 2/p2.pdf              50 B
          Course-B/Part 2/cover.jpg
          Empty/sub/notes.txt
          Music Only/track.ogg                70 B
    """
    lib = tmp_path / "lib"
    make_file(lib / "Course-A" / "notes.pdf", 10_000)
    make_file(lib / "Course-A" / "audio" / "lec1.mp3", 500_000)
    make_file(lib / "Course-B" / "b1.docx", 200)
    make_file(lib / "Course-B" / "b2.PDF", 300)
    make_file(lib / "Course-B" / "Readme.txt", content=b"  Intro to course B\n")
    make_file(lib / "Course-B" / "Part 2" / "p2.pdf", 50)
    make_file(lib / "Course-B" / "Part 2" / "cover.jpg", content=b"\xff\xd8jpeg")
    make_file(lib / "Empty" / "sub" / "notes.txt", 10)
    make_file(lib / "Music Only" / "track.ogg", 70)
    return lib


@pytest.fixture
def deny_listing(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Return a helper making os.scandir fail with PermissionError for a path."""
    denied: set[str] = set()
    real_scandir = os.scandir

    def fake_scandir(path=".", *args, **kwargs):  # type: ignore[no-untyped-def]
        if str(Path(path).absolute()) in denied:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path, *args, **kwargs)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _deny(path: Path) -> None:
        denied.add(str(path.absolute()))

    return _deny
