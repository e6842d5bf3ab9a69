"""Shared test fixtures for the board tests."""

import pytest

from stickyboard.board import Board
from stickyboard.commands import BoardController
from stickyboard.schema import Card, ColumnGeometry, Status
from stickyboard.store import JsonStore


class FakeRenderer:
    """Three 200-wide lanes with 10 units of padding between them."""

    def __init__(self, geometry=None):
        self.geometry = geometry or [
            ColumnGeometry(x=0, width=200),
            ColumnGeometry(x=210, width=200),
            ColumnGeometry(x=420, width=200),
        ]
        self.refreshed_columns = []
        self.board_refreshes = 0

    def column_geometry(self):
        return self.geometry

    def refresh_column(self, index):
        self.refreshed_columns.append(index)

    def refresh_board(self):
        self.board_refreshes += 1


def make_card(title="Task", status=Status.NOT_STARTED, subtitle="sub", body="body"):
    return Card(title=title, subtitle=subtitle, body=body, status=status)


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "saves" / "todos.json")


@pytest.fixture
def board():
    """A board with one card in each lane."""
    b = Board()
    for status in Status:
        b.add_card(status.index, make_card(f"{status.label} card", status))
    b.mark_clean()
    return b


@pytest.fixture
def notes():
    return []


@pytest.fixture
def controller(store, renderer, notes):
    return BoardController(store, renderer, notify=lambda t, m: notes.append((t, m)))
