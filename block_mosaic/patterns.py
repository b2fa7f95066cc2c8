"""Wildcard name patterns for excluding or requiring tiles.

A pattern is a tile name with an optional ``*`` wildcard at either end:

- ``stone``    matches exactly ``stone``
- ``stone*``   matches names starting with ``stone``
- ``*_log``    matches names ending with ``_log``
- ``*glass*``  matches names containing ``glass``
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

WILDCARD = "*"
NO_FILE = "-"


class MatchKind(Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Pattern:
    kind: MatchKind
    target: str

    @classmethod
    def parse(cls, text: str) -> Pattern:
        """Build a pattern from its leading / trailing wildcard markers."""
        leading = text.startswith(WILDCARD)
        trailing = text.endswith(WILDCARD) and len(text) > 1
        if leading and trailing:
            return cls(MatchKind.CONTAINS, text[1:-1])
        if leading:
            return cls(MatchKind.SUFFIX, text[1:])
        if trailing:
            return cls(MatchKind.PREFIX, text[:-1])
        return cls(MatchKind.EXACT, text)

    def matches(self, value: str) -> bool:
        if self.kind is MatchKind.EXACT:
            return value == self.target
        if self.kind is MatchKind.PREFIX:
            return value.startswith(self.target)
        if self.kind is MatchKind.SUFFIX:
            return value.endswith(self.target)
        return self.target in value


@dataclass(frozen=True)
class NameFilter:
    """Predicate over tile names built from exclude / require pattern lists.

    A name passes when it matches none of ``exclude`` and, if ``require``
    is non-empty, at least one of ``require``.
    """

    exclude: tuple[Pattern, ...] = field(default_factory=tuple)
    require: tuple[Pattern, ...] = field(default_factory=tuple)

    @classmethod
    def from_strings(
        cls,
        exclude: Iterable[str] = (),
        require: Iterable[str] = (),
    ) -> NameFilter:
        return cls(
            exclude=tuple(Pattern.parse(p) for p in exclude),
            require=tuple(Pattern.parse(p) for p in require),
        )

    def __call__(self, name: str) -> bool:
        if any(p.matches(name) for p in self.exclude):
            return False
        if self.require:
            return any(p.matches(name) for p in self.require)
        return True


def read_pattern_file(path: str | Path | None) -> list[str]:
    """Read one pattern per line, ignoring blanks and ``#`` comments.

    ``None`` or ``"-"`` means no file and returns an empty list.
    """
    if path is None or str(path) == NO_FILE:
        return []
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    patterns = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns
