"""
Fixed-width text renderer.

Lays the three lanes out side by side in character cells and implements
the renderer contract the drag engine and controller rely on:

    column_geometry()      -> lane extents, lane i at i * (width + gap)
    refresh_column(index)  -> mark one lane for repaint
    refresh_board()        -> mark every lane for repaint
"""
import textwrap
from typing import List, Set

from .board import Board, COLUMN_COUNT
from .schema import Card, ColumnGeometry, Position

SEP_CHAR = "|"
RULE_CHAR = "-"
DRAG_MARK = "> "


class TextRenderer:
    def __init__(self, board: Board, column_width: int = 28, column_gap: int = 3):
        self.board = board
        self.column_width = max(8, column_width)
        self.column_gap = max(1, column_gap)
        self.stale: Set[int] = set(range(COLUMN_COUNT))

    # ── renderer contract ────────────────────────────────────────────────

    def column_geometry(self) -> List[ColumnGeometry]:
        step = self.column_width + self.column_gap
        return [ColumnGeometry(x=i * step, width=self.column_width) for i in range(COLUMN_COUNT)]

    def refresh_column(self, index: int) -> None:
        self.stale.add(index)

    def refresh_board(self) -> None:
        self.stale.update(range(COLUMN_COUNT))

    # ── layout helpers ───────────────────────────────────────────────────

    def lane_center(self, index: int) -> Position:
        geom = self.column_geometry()[index]
        return Position(geom.x + geom.width / 2, 0)

    def card_position(self, card: Card) -> Position:
        """Where a card's top-left corner sits in its lane, in cells."""
        index = self.board.find_column_index(card)
        if index is None:
            return Position()
        row = 2  # header + rule
        for other in self.board.columns[index].cards:
            if other is card:
                break
            row += len(self._card_lines(other))
        return Position(self.column_geometry()[index].x, row) + card.drag_offset

    # ── drawing ──────────────────────────────────────────────────────────

    def _wrap(self, text: str, indent: str = "") -> List[str]:
        width = self.column_width - len(indent)
        lines: List[str] = []
        for paragraph in text.splitlines() or [""]:
            wrapped = textwrap.wrap(paragraph, width=width) or [""]
            lines.extend(indent + line for line in wrapped)
        return lines

    def _card_lines(self, card: Card) -> List[str]:
        prefix = DRAG_MARK if card.is_dragging else ""
        lines = self._wrap(prefix + card.title)
        lines += self._wrap(card.subtitle, indent="  ")
        lines += self._wrap(card.body, indent="    ")
        lines.append(RULE_CHAR * self.column_width)
        return lines

    def render_column(self, index: int) -> List[str]:
        """Lines for one lane: header, rule, then each card."""
        column = self.board.column(index)
        lines = [column.title.center(self.column_width), "=" * self.column_width]
        if not column.cards:
            lines.append("(empty)")
        for card in column.cards:
            lines.extend(self._card_lines(card))
        self.stale.discard(index)
        return lines

    def render_board(self) -> str:
        lanes = [self.render_column(i) for i in range(COLUMN_COUNT)]
        height = max(len(lane) for lane in lanes)
        gap = " " * ((self.column_gap - 1) // 2)
        sep = gap + SEP_CHAR + " " * (self.column_gap - 1 - len(gap))
        rows = []
        for r in range(height):
            cells = [
                (lane[r] if r < len(lane) else "").ljust(self.column_width)
                for lane in lanes
            ]
            rows.append(sep.join(cells).rstrip())
        return "\n".join(rows)
