"""
Command surface for the renderer: create/edit/delete handlers, load/save,
pointer forwarding and the exit prompt.

BoardController owns the single Board instance. Handlers validate before
touching it; contract violations from the Board or the drag engine are
logged and dropped so a stray UI event never takes the process down.
"""
import logging
from typing import Callable, Optional

from .board import Board
from .drag import DragEngine
from .errors import FormatError, IndexOutOfRange, InvalidState, StoreError, ValidationError
from .schema import Card, Position, Status
from .store import JsonStore

logger = logging.getLogger(__name__)


def validate_fields(title: str, subtitle: str, body: str) -> None:
    """Raise ValidationError for the first empty field."""
    for name, value in (("title", title), ("subtitle", subtitle), ("body", body)):
        if not isinstance(value, str) or len(value) == 0:
            raise ValidationError(name)


def validate_status(status) -> Status:
    if not isinstance(status, Status):
        raise ValidationError("status", f"status must be one of {[s.label for s in Status]}")
    return status


def _log_notify(title: str, message: str) -> None:
    logger.info(f"{title}: {message}")


class BoardController:
    """Single owner of the board; every UI action goes through here.

    ``renderer`` provides ``column_geometry()``, ``refresh_column(index)`` and
    ``refresh_board()``. ``notify(title, message)`` surfaces storage errors and
    confirmations to the user.
    """

    def __init__(
        self,
        store: JsonStore,
        renderer,
        notify: Optional[Callable[[str, str], None]] = None,
        board: Optional[Board] = None,
    ):
        self.board = board if board is not None else Board()
        self.store = store
        self.renderer = renderer
        self.notify = notify or _log_notify
        self.drag = DragEngine(self.board, renderer)
        self.board.subscribe("*", self._on_board_event)

    def _on_board_event(self, event_type: str, **kwargs) -> None:
        if event_type == "board_reset":
            self.renderer.refresh_board()
            return
        lanes = {kwargs.get(k) for k in ("column_index", "from_index", "to_index")}
        for index in sorted(i for i in lanes if i is not None):
            self.renderer.refresh_column(index)

    # ── create / edit / delete ───────────────────────────────────────────

    def create_card(
        self, title: str, subtitle: str, body: str, status: Status = Status.NOT_STARTED
    ) -> Card:
        """Validate and add a new card. Raises ValidationError."""
        validate_fields(title, subtitle, body)
        status = validate_status(status)
        card = Card(title=title, subtitle=subtitle, body=body, status=status)
        self.board.add_card(status.index, card)
        logger.info(f"Created card {title!r} in {status.label}")
        return card

    def edit_card(self, card: Card, title: str, subtitle: str, body: str, status: Status) -> bool:
        """Apply all four fields or none. Raises ValidationError.

        Returns False when the card is no longer on the board.
        """
        validate_fields(title, subtitle, body)
        status = validate_status(status)

        current = self.board.find_column_index(card)
        if current is None:
            logger.warning(f"Edit ignored, {card.title!r} is not on the board")
            return False

        card.title = title
        card.subtitle = subtitle
        card.body = body
        if status.index != current:
            self.board.move_card(card, status.index)
        else:
            self.board.touch(card)
        logger.info(f"Edited card {title!r} ({status.label})")
        return True

    def delete_card(self, card: Card, confirmed: bool) -> bool:
        """Remove a card once the user has said yes. Safe to repeat."""
        if not confirmed:
            return False
        return self.board.remove_card(card)

    def status_for(self, card: Card) -> Status:
        """Lane to preselect in an edit form; Not Started if the card is detached."""
        index = self.board.find_column_index(card)
        return Status.from_index(index) if index is not None else Status.NOT_STARTED

    # ── persistence ──────────────────────────────────────────────────────

    def load_board(self) -> bool:
        """Replace the board with the stored cards. Keeps the board on failure."""
        try:
            cards = self.store.load()
        except (StoreError, FormatError) as e:
            logger.error(f"Error loading cards: {e}")
            self.notify("Error", str(e))
            return False
        self.board.reset(cards)
        return True

    def save_board(self) -> bool:
        """Write the board to the store. The board is kept dirty on failure."""
        try:
            self.store.save(self.board)
        except StoreError as e:
            logger.error(f"Error saving cards: {e}")
            self.notify("Error", str(e))
            return False
        self.notify("Success", "Cards saved successfully")
        return True

    def request_close(self, decide_save: Callable[[], bool]) -> bool:
        """Exit prompt. Returns True when it is fine to close."""
        if not self.board.dirty:
            return True
        if not decide_save():
            return True
        return self.save_board()

    # ── pointer events ───────────────────────────────────────────────────

    def pointer_down(self, card: Card, pos: Position) -> None:
        try:
            self.drag.pointer_down(card, pos)
        except InvalidState as e:
            logger.error(f"pointer_down rejected: {e}")

    def pointer_move(self, pos: Position) -> None:
        self.drag.pointer_move(pos)

    def pointer_up(self, pos: Position) -> Optional[int]:
        try:
            return self.drag.pointer_up(pos)
        except (InvalidState, IndexOutOfRange) as e:
            logger.error(f"pointer_up rejected: {e}")
            return None
