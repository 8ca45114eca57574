"""Tests for the renderer module."""

import io
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from learnshelf.cli.renderer import (
    format_size,
    render_grouped,
    render_issues,
    render_sets,
    render_tree,
)
from learnshelf.models.core import (
    FolderGroup,
    GroupedFile,
    GroupedListing,
    ScanIssue,
    SetSummary,
    SetType,
    Thumbnail,
    TreeNode,
)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1536, "1.5 KB"),
        (510_000, "498.0 KB"),
        (5 * 1024**3, "5.0 GB"),
        (3 * 1024**5, "3072.0 TB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


def test_render_sets(console: Console, tmp_path: Path) -> None:
    sets = [
        SetSummary(
            id="1",
            path=tmp_path / "[draft] course",
            name="[draft] course",
            docs=2,
            audio=3,
            type=SetType.DOC_AUDIO,
            size=2048,
            updated_at=datetime(2024, 1, 2, 3, 4),
        ),
        SetSummary(
            id="2",
            path=tmp_path / "b",
            name="b",
            docs=1,
            audio=0,
            type=SetType.DOC_ONLY,
            size=10,
        ),
    ]

    render_sets(sets, console=console)

    output = _output(console)
    assert "[draft] course" in output
    assert "Doc + Audio" in output
    assert "2024-01-02" in output
    assert "2.0 KB" in output
    assert "Sets: 2 | Docs: 3 | Audio: 3" in output


def test_render_tree(console: Console, tmp_path: Path) -> None:
    child = TreeNode(
        id="c",
        name="Part 2",
        path=tmp_path / "Part 2",
        relative_path="root/Part 2",
        docs=1,
        size=50,
        thumbnail=Thumbnail(
            mime_type="image/jpeg", data="", source=tmp_path / "Part 2" / "cover.jpg"
        ),
    )
    root = TreeNode(
        id="r",
        name="root",
        path=tmp_path,
        relative_path="root",
        children=[child],
        docs=1,
        size=50,
    )

    render_tree([root], console=console)

    output = _output(console)
    assert "root" in output
    assert "Part 2" in output
    assert "(1 docs, 0 audio, 50 B)" in output
    assert "cover.jpg" in output


def test_render_grouped(console: Console, tmp_path: Path) -> None:
    doc = GroupedFile(
        name="a.pdf",
        path=tmp_path / "a.pdf",
        relative_path="a.pdf",
        folder="/",
        type="pdf",
    )
    track = GroupedFile(
        name="t.mp3",
        path=tmp_path / "audio" / "t.mp3",
        relative_path="audio/t.mp3",
        folder="audio",
        type="mp3",
    )
    listing = GroupedListing(
        docs=[doc],
        audio=[track],
        structure=[
            FolderGroup(folder="set", folder_path=tmp_path, docs=[doc]),
            FolderGroup(folder="audio", folder_path=tmp_path / "audio", audio=[track]),
        ],
    )

    render_grouped(listing, console=console)

    output = _output(console)
    assert "a.pdf" in output
    assert "t.mp3" in output
    assert "Docs: 1 | Audio: 1" in output


def test_render_issues(console: Console, tmp_path: Path) -> None:
    render_issues([], console=console)
    assert _output(console) == ""

    render_issues(
        [ScanIssue(path=tmp_path / "x", message="Error accessing directory: [Errno 13]")],
        console=console,
    )

    output = _output(console)
    assert "1 issue(s)" in output
    assert "[Errno 13]" in output
