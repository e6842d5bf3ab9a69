"""
Board aggregate: three fixed lanes and the cards they own.

The board is the single source of truth for card membership. Every change
marks it dirty and is announced to subscribers so a renderer can repaint
the lanes involved.

Events:
    card_added    (card, column_index)
    card_removed  (card, column_index)
    card_moved    (card, from_index, to_index)
    card_updated  (card, column_index)
    board_reset   ()
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional

from .errors import IndexOutOfRange, InvalidState
from .schema import Card, Status

logger = logging.getLogger(__name__)

COLUMN_COUNT = len(Status)


class Column:
    """One status lane holding an ordered list of cards."""

    def __init__(self, status: Status):
        self.status = status
        self.cards: List[Card] = []

    @property
    def title(self) -> str:
        return self.status.label

    @property
    def index(self) -> int:
        return self.status.index

    def append(self, card: Card) -> None:
        self.cards.append(card)
        card.column = self
        card.status = self.status

    def remove(self, card: Card) -> None:
        self.cards.remove(card)
        if card.column is self:
            card.column = None

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Column({self.title!r}, {len(self.cards)} cards)"


class Board:
    """Fixed set of lanes indexed by status."""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.columns: List[Column] = [Column(status) for status in Status]
        self.subscribers: Dict[str, list] = {}  # event_type -> list of callbacks
        self._dirty = False
        if cards:
            self.reset(cards)

    # ── signals ──────────────────────────────────────────────────────────

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type ("*" receives every event)."""
        self.subscribers.setdefault(event_type, []).append(callback)

    def _emit(self, event_type: str, **kwargs) -> None:
        callbacks = self.subscribers.get(event_type, []) + self.subscribers.get("*", [])
        for callback in callbacks:
            try:
                callback(event_type, **kwargs)
            except Exception:
                logger.exception(f"Error in {event_type} subscriber")

    def _changed(self, event_type: str, **kwargs) -> None:
        self._dirty = True
        self._emit(event_type, **kwargs)

    # ── dirty flag ───────────────────────────────────────────────────────

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    # ── queries ──────────────────────────────────────────────────────────

    def column(self, index: int) -> Column:
        self._check_index(index)
        return self.columns[index]

    def all_cards(self) -> List[Card]:
        """Every card, lane 0 first, each lane in display order."""
        return [card for column in self.columns for card in column.cards]

    def find_column_index(self, card: Card) -> Optional[int]:
        """Index of the lane holding this exact card, or None."""
        for index, column in enumerate(self.columns):
            for candidate in column.cards:
                if candidate is card:
                    return index
        return None

    def _locate(self, card: Card):
        """Find (column, stored card): identity match first, then content match."""
        for column in self.columns:
            for candidate in column.cards:
                if candidate is card:
                    return column, candidate
        for column in self.columns:
            for candidate in column.cards:
                if candidate.same_content(card):
                    return column, candidate
        return None, None

    # ── mutations ────────────────────────────────────────────────────────

    def add_card(self, column_index: int, card: Card) -> None:
        """Append a card to a lane; its status follows the lane."""
        self._check_index(column_index)
        current = self.find_column_index(card)
        if current is not None:
            raise InvalidState(
                f"{card.title!r} is already in lane {current}; use move_card"
            )
        self.columns[column_index].append(card)
        logger.debug(f"Added {card.title!r} to {self.columns[column_index].title}")
        self._changed("card_added", card=card, column_index=column_index)

    def remove_card(self, card: Card) -> bool:
        """Remove a card wherever it is. Returns False (and does nothing) if absent."""
        column, stored = self._locate(card)
        if column is None:
            logger.debug(f"Remove ignored, {card.title!r} is not on the board")
            return False
        column.remove(stored)
        logger.debug(f"Removed {stored.title!r} from {column.title}")
        self._changed("card_removed", card=stored, column_index=column.index)
        return True

    def move_card(self, card: Card, target_column_index: int) -> None:
        """Detach a card from its lane (if any) and append it to the target lane."""
        self._check_index(target_column_index)
        from_index = None
        for column in self.columns:
            if card in column.cards:
                from_index = column.index
                column.remove(card)
                break
        self.columns[target_column_index].append(card)
        logger.debug(
            f"Moved {card.title!r} from lane {from_index} to lane {target_column_index}"
        )
        self._changed(
            "card_moved", card=card, from_index=from_index, to_index=target_column_index
        )

    def touch(self, card: Card) -> None:
        """Announce an in-place edit of a card's text."""
        self._changed("card_updated", card=card, column_index=self.find_column_index(card))

    def reset(self, cards: Iterable[Card]) -> None:
        """Replace the whole board with cards placed by their status. Leaves it clean."""
        for column in self.columns:
            for card in list(column.cards):
                column.remove(card)
        for card in cards:
            self.columns[card.status.index].append(card)
        self._dirty = False
        self._emit("board_reset")

    @staticmethod
    def _check_index(index: int) -> None:
        if not isinstance(index, int) or not 0 <= index < COLUMN_COUNT:
            raise IndexOutOfRange(
                f"Column index {index} out of range [0, {COLUMN_COUNT - 1}]"
            )

    def __str__(self) -> str:
        return ", ".join(f"{c.title}: {len(c)} cards" for c in self.columns)
