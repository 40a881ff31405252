"""Shared fixtures: in-memory note source and file system doubles."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from quarto_export.errors import ReadFailure
from quarto_export.note import Note
from quarto_export.parser import parse_frontmatter, parse_tags


def make_note(name: str, content: str = "", **kwargs) -> Note:
    """Build a Note the way parse_note would, without touching the disk."""
    frontmatter, body = parse_frontmatter(content)
    kwargs.setdefault("frontmatter", frontmatter)
    kwargs.setdefault("inline_tags", parse_tags(body))
    return Note(path=Path("/vault") / f"{name}.md", content=content, **kwargs)


class DictNoteSource:
    """NoteSource over a ``{name: content}`` mapping; records lookups."""

    def __init__(self, notes: dict[str, str]) -> None:
        self.notes = {name: make_note(name, textwrap.dedent(text)) for name, text in notes.items()}
        self.lookups: list[str] = []
        self.unreadable: set[str] = set()

    def resolve(self, name: str) -> Note | None:
        self.lookups.append(name)
        return self.notes.get(name)

    def read(self, note: Note) -> str:
        if note.basename in self.unreadable:
            raise ReadFailure(note.path)
        return note.content


class MemoryFileSystem:
    """FileSystem double keeping files in a dict and logging each call."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()
        self.calls: list[tuple[str, Path]] = []
        self.fail_on: set[str] = set()

    def _call(self, op: str, path: Path) -> None:
        self.calls.append((op, Path(path)))
        if op in self.fail_on:
            raise PermissionError(f"{op} denied: {path}")

    def exists(self, path: Path) -> bool:
        self._call("exists", path)
        return Path(path) in self.files or Path(path) in self.dirs

    def mkdir(self, path: Path) -> None:
        self._call("mkdir", path)
        self.dirs.add(Path(path))

    def remove(self, path: Path) -> None:
        self._call("remove", path)
        del self.files[Path(path)]

    def create(self, path: Path, text: str) -> None:
        self._call("create", path)
        if Path(path) in self.files:
            raise FileExistsError(path)
        self.files[Path(path)] = text


@pytest.fixture()
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture()
def source() -> DictNoteSource:
    """Small set of notes covering whole, header and block embeds."""
    return DictNoteSource(
        {
            "Note": """\
                ---
                aliases: [n]
                ---
                Intro paragraph.

                ## Sec
                body
                ## Next
                more
            """,
            "Outline": """\
                # Top
                intro
                ## Child
                child text
                ### Grandchild
                deep
                ## Sibling
                sibling text
                # Other top
                other
            """,
            "Blocks": """\
                First paragraph
                continues here ^first

                Second paragraph ^second-id

                - item one
                - item two

                ^list
            """,
        }
    )


@pytest.fixture()
def note_factory():
    return make_note
