"""Core Note dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Note:
    """Point-in-time snapshot of a single markdown note in the vault."""

    path: Path
    content: str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    #: ``#tags`` found in the body text (without the leading ``#``)
    inline_tags: list[str] = field(default_factory=list)
    #: POSIX timestamps; ``None`` when the file could not be stat'ed
    created: float | None = None
    modified: float | None = None

    @property
    def basename(self) -> str:
        """File name without extension; the default export title."""
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()
