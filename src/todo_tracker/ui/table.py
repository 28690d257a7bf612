# src/todo_tracker/ui/table.py

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from .colors import visible_width


class Table:
    """
    Fixed-width box-drawn table.

    Column widths track the widest visible cell seen so far (ANSI markers
    excluded) and never shrink. Rendering happens once, after all rows
    have been added.
    """

    def __init__(self, headers: Sequence[str]) -> None:
        self.headers: list[str] = list(headers)
        self.rows: list[list[str]] = []
        self.widths: list[int] = [visible_width(h) for h in self.headers]

    def add_row(self, cells: Sequence[str]) -> None:
        row = list(cells)
        self.rows.append(row)
        for i, cell in enumerate(row[: len(self.widths)]):
            self.widths[i] = max(self.widths[i], visible_width(cell))

    def _line(self, left: str, mid: str, right: str, fill: str = "─") -> str:
        return left + mid.join(fill * (w + 2) for w in self.widths) + right

    def _row(self, cells: Sequence[str]) -> str:
        parts = []
        for i, width in enumerate(self.widths):
            cell = cells[i] if i < len(cells) else ""
            pad = max(0, width - visible_width(cell))
            parts.append(f" {cell}{' ' * pad} ")
        return "|" + "|".join(parts) + "|"

    def render(self) -> list[str]:
        if not self.rows:
            return []
        lines = [self._line("┌", "┬", "┐"), self._row(self.headers), self._line("├", "┼", "┤")]
        lines.extend(self._row(r) for r in self.rows)
        lines.append(self._line("└", "┴", "┘"))
        return lines

    def print_to(self, stream: TextIO | None = None) -> None:
        out = stream if stream is not None else sys.stdout
        for line in self.render():
            out.write(line + "\n")

    def __str__(self) -> str:
        return "\n".join(self.render())
