"""Materials list derived from the tile usage tally."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

STACK_SIZE = 64


def materials_report(tally: Mapping[str, int]) -> list[tuple[str, int]]:
    """(name, count) pairs, most used first, then by name."""
    return sorted(tally.items(), key=lambda item: (-item[1], item[0]))


def format_materials(report: list[tuple[str, int]]) -> str:
    return "\n".join(f"{name} : {count}" for name, count in report)


def write_materials(tally: Mapping[str, int], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_materials(materials_report(tally)) + "\n", encoding="utf-8")


def stacks(count: int, stack_size: int = STACK_SIZE) -> tuple[int, int]:
    """Split a block count into full stacks and leftover blocks."""
    return divmod(count, stack_size)


def format_stacks(count: int, stack_size: int = STACK_SIZE) -> str:
    full, rest = stacks(count, stack_size)
    return f"{full} x {stack_size} + {rest}"
