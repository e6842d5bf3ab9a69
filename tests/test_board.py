"""
Tests for the board aggregate: membership, status invariant, signals, dirty flag.
"""
import pytest

from conftest import make_card
from stickyboard.board import Board
from stickyboard.errors import IndexOutOfRange, InvalidState
from stickyboard.schema import Status


def assert_consistent(board):
    """Every card sits in exactly one lane and its status matches that lane."""
    seen = []
    for index, column in enumerate(board.columns):
        for card in column.cards:
            assert card.status.index == index
            assert board.find_column_index(card) == index
            assert card.column is column
            seen.append(id(card))
    assert len(seen) == len(set(seen))


class TestColumns:

    def test_three_fixed_lanes(self):
        board = Board()
        assert [c.title for c in board.columns] == ["Not Started", "In Progress", "Done"]
        assert all(len(c) == 0 for c in board.columns)
        assert not board.dirty

    def test_column_lookup_out_of_range(self):
        with pytest.raises(IndexOutOfRange):
            Board().column(3)


class TestAddCard:

    def test_add_appends_and_sets_status(self):
        board = Board()
        card = make_card("A", Status.DONE)
        board.add_card(0, card)
        assert board.columns[0].cards == [card]
        assert card.status == Status.NOT_STARTED
        assert board.dirty
        assert_consistent(board)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_add_out_of_range(self, index):
        board = Board()
        with pytest.raises(IndexOutOfRange):
            board.add_card(index, make_card())
        assert board.all_cards() == []
        assert not board.dirty

    def test_adding_a_placed_card_is_rejected(self):
        board = Board()
        card = make_card("A")
        board.add_card(0, card)
        board.mark_clean()
        with pytest.raises(InvalidState):
            board.add_card(1, card)
        assert board.all_cards().count(card) == 1
        assert board.find_column_index(card) == 0
        assert card.status == Status.NOT_STARTED
        assert not board.dirty
        assert_consistent(board)

    def test_insertion_order_is_display_order(self):
        board = Board()
        cards = [make_card(t) for t in "ABC"]
        for card in cards:
            board.add_card(1, card)
        assert [c.title for c in board.columns[1].cards] == ["A", "B", "C"]


class TestRemoveCard:

    def test_remove_is_idempotent(self, board):
        card = board.columns[1].cards[0]
        assert board.remove_card(card)
        after_first = [list(c.cards) for c in board.columns]
        assert not board.remove_card(card)
        assert [list(c.cards) for c in board.columns] == after_first
        assert card.column is None

    def test_remove_by_content(self, board):
        stale = make_card("In Progress card", Status.IN_PROGRESS)
        assert board.remove_card(stale)
        assert board.columns[1].cards == []

    def test_remove_prefers_identity(self):
        board = Board()
        first = make_card("Twin")
        second = make_card("Twin")
        board.add_card(0, first)
        board.add_card(0, second)
        board.remove_card(second)
        assert board.columns[0].cards == [first]

    def test_missing_card_does_not_dirty(self, board):
        assert not board.remove_card(make_card("nobody"))
        assert not board.dirty


class TestMoveCard:

    def test_move_between_lanes(self, board):
        card = board.columns[0].cards[0]
        board.move_card(card, 2)
        assert board.columns[0].cards == []
        assert board.columns[2].cards[-1] is card
        assert card.status == Status.DONE
        assert board.dirty
        assert_consistent(board)

    def test_move_within_lane_appends(self):
        board = Board()
        a, b = make_card("A"), make_card("B")
        board.add_card(0, a)
        board.add_card(0, b)
        board.move_card(a, 0)
        assert board.columns[0].cards == [b, a]
        assert_consistent(board)

    def test_move_detached_card_adds_it(self):
        board = Board()
        card = make_card("Loose", Status.DONE)
        board.move_card(card, 1)
        assert board.find_column_index(card) == 1
        assert card.status == Status.IN_PROGRESS

    def test_move_out_of_range_leaves_card(self, board):
        card = board.columns[0].cards[0]
        with pytest.raises(IndexOutOfRange):
            board.move_card(card, 5)
        assert board.find_column_index(card) == 0
        assert card.status == Status.NOT_STARTED
        assert_consistent(board)

    def test_invariant_holds_after_every_move(self, board):
        cards = board.all_cards()
        for step, target in enumerate([2, 0, 1, 1, 0, 2, 2]):
            board.move_card(cards[step % len(cards)], target)
            assert_consistent(board)
        assert len(board.all_cards()) == 3


class TestSignals:

    def test_subscribers_receive_events(self, board):
        events = []
        board.subscribe("*", lambda event, **kw: events.append((event, kw)))
        card = board.columns[0].cards[0]
        board.move_card(card, 1)
        board.touch(card)
        board.remove_card(card)
        assert [e for e, _ in events] == ["card_moved", "card_updated", "card_removed"]
        assert events[0][1]["from_index"] == 0
        assert events[0][1]["to_index"] == 1
        assert events[2][1]["column_index"] == 1

    def test_failing_subscriber_does_not_break_board(self, board):
        def broken(event, **kw):
            raise RuntimeError("boom")

        board.subscribe("card_moved", broken)
        card = board.columns[0].cards[0]
        board.move_card(card, 2)
        assert board.find_column_index(card) == 2

    def test_reset_places_cards_by_status_and_stays_clean(self):
        board = Board()
        events = []
        board.subscribe("board_reset", lambda event, **kw: events.append(event))
        board.add_card(0, make_card("old"))
        board.reset([make_card("x", Status.DONE), make_card("y", Status.IN_PROGRESS)])
        assert [c.title for c in board.all_cards()] == ["y", "x"]
        assert not board.dirty
        assert events == ["board_reset"]
        assert_consistent(board)
