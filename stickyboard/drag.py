"""
Drag gesture state machine.

    Idle --pointer_down(card, pos)--> Dragging
    Dragging --pointer_move(pos)--> Dragging      (visual offset only)
    Dragging --pointer_up(pos)--> Idle            (hit-test, Board.move_card)

Pointer moves apply the delta from the previously seen position to the
card's ``drag_offset``, so the offset always equals ``pos - start``.

Hit-testing only looks at x: lanes are full height, so a release anywhere
inside a lane's horizontal band drops the card into that lane. Releases
left or right of the whole strip are clamped onto the first or last lane.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .board import Board
from .errors import InvalidState
from .schema import Card, ColumnGeometry, Position

logger = logging.getLogger(__name__)


@dataclass
class DragState:
    """One in-progress gesture."""
    card: Card
    start_pos: Position
    last_pos: Position
    origin_column_index: int


def hit_test(x: float, geometry: Sequence[ColumnGeometry]) -> Optional[int]:
    """Map a release x-coordinate to a lane index, or None if it falls between lanes."""
    if not geometry:
        return None
    left = geometry[0].x
    right = geometry[-1].right
    if x < left:
        x = left
    elif x >= right:
        x = right - 1
    for index, geom in enumerate(geometry):
        if geom.contains(x):
            return index
    return None


class DragEngine:
    """Tracks at most one dragged card and commits it to a lane on release.

    ``renderer`` must provide ``column_geometry()`` and ``refresh_column(index)``.
    """

    def __init__(self, board: Board, renderer):
        self.board = board
        self.renderer = renderer
        self.state: Optional[DragState] = None

    @property
    def is_dragging(self) -> bool:
        return self.state is not None

    def pointer_down(self, card: Card, pos: Position) -> None:
        if self.state is not None:
            raise InvalidState(
                f"Cannot start dragging {card.title!r}: "
                f"{self.state.card.title!r} is already being dragged"
            )
        origin = self.board.find_column_index(card)
        if origin is None:
            raise InvalidState(f"Cannot drag {card.title!r}: card is not on the board")

        self.state = DragState(card=card, start_pos=pos, last_pos=pos, origin_column_index=origin)
        card.is_dragging = True
        card.drag_offset = Position()
        # Lift the card above its siblings; membership is unchanged
        self.renderer.refresh_column(origin)

    def pointer_move(self, pos: Position) -> None:
        state = self.state
        if state is None:
            return
        state.card.drag_offset = state.card.drag_offset + (pos - state.last_pos)
        state.last_pos = pos

    def pointer_up(self, pos: Position) -> Optional[int]:
        """Finish the gesture. Returns the lane the card ended up in, or None."""
        state = self.state
        if state is None:
            return None
        self.state = None

        card = state.card
        card.is_dragging = False
        card.drag_offset = Position()

        if self.board.find_column_index(card) is None:
            logger.warning(f"Dropped {card.title!r} after it left the board; ignoring")
            return None

        target = hit_test(pos.x, self.renderer.column_geometry())
        if target is None:
            logger.warning(
                f"Release at x={pos.x} hit no lane; {card.title!r} stays in lane "
                f"{state.origin_column_index}"
            )
            self.renderer.refresh_column(state.origin_column_index)
            return state.origin_column_index

        self.board.move_card(card, target)
        logger.info(f"Dragged {card.title!r} to {card.status.label}")
        return target
