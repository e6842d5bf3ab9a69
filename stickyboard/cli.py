#!/usr/bin/env python3
"""
stickyboard command line.

Usage:
    stickyboard show
    stickyboard add "Write docs" "release 1.0" "Cover install and usage" --status in-progress
    stickyboard edit 1 2 --title "Write more docs" --status done
    stickyboard drag not-started 1 done
    stickyboard delete 3 1 --yes

Lanes are given as 1-based numbers or status names (not-started,
in-progress, done); cards as their 1-based position in the lane.
"""
import argparse
import logging
import sys
from typing import List, Optional

from .board import Board
from .commands import BoardController
from .config import Config
from .errors import IndexOutOfRange, ValidationError
from .render import TextRenderer
from .schema import Card, Status
from .store import JsonStore

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when a command-line argument does not name a lane or card."""
    pass


def _notify(title: str, message: str) -> None:
    stream = sys.stderr if title == "Error" else sys.stdout
    print(f"{title}: {message}", file=stream)


def _status(value: str) -> Status:
    try:
        return Status.from_str(value)
    except (ValueError, IndexOutOfRange) as e:
        raise argparse.ArgumentTypeError(str(e))


def _pick(controller: BoardController, lane: Status, number: int) -> Card:
    cards = controller.board.column(lane.index).cards
    if not 1 <= number <= len(cards):
        raise CommandError(f"No card #{number} in {lane.label} ({len(cards)} cards)")
    return cards[number - 1]


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


# ── commands ──────────────────────────────────────────────────────────────

def cmd_show(controller, renderer, args) -> bool:
    print(renderer.render_board())
    return False


def cmd_add(controller, renderer, args) -> bool:
    card = controller.create_card(args.title, args.subtitle, args.body, args.status)
    print(f"Added {card.title!r} to {card.status.label}")
    return True


def cmd_edit(controller, renderer, args) -> bool:
    card = _pick(controller, args.lane, args.number)
    controller.edit_card(
        card,
        args.title if args.title is not None else card.title,
        args.subtitle if args.subtitle is not None else card.subtitle,
        args.body if args.body is not None else card.body,
        args.status if args.status is not None else controller.status_for(card),
    )
    print(f"Updated {card.title!r} ({card.status.label})")
    return True


def cmd_delete(controller, renderer, args) -> bool:
    card = _pick(controller, args.lane, args.number)
    confirmed = args.yes or _confirm(f"Delete {card.title!r}?")
    if controller.delete_card(card, confirmed):
        print(f"Deleted {card.title!r}")
        return True
    print("Nothing deleted")
    return False


def cmd_drag(controller, renderer, args) -> bool:
    card = _pick(controller, args.lane, args.number)
    release = renderer.lane_center(args.target.index)
    controller.pointer_down(card, renderer.card_position(card))
    controller.pointer_move(release)
    controller.pointer_up(release)
    print(f"{card.title!r} is in {card.status.label}")
    return True


COMMANDS = {
    "show": cmd_show,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "drag": cmd_drag,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stickyboard",
        description="Sticky-note Kanban board: Not Started / In Progress / Done",
    )
    ap.add_argument("--config", default=None, help="Path to stickyboard.yaml")
    ap.add_argument(
        "--store", default=None,
        help="Card file (default: saves/todos.json, or $STICKYBOARD_STORE)",
    )
    ap.add_argument(
        "--dry-run", action="store_true",
        help="Apply the command but answer 'don't save' at exit",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the board")

    p = sub.add_parser("add", help="Create a card")
    p.add_argument("title")
    p.add_argument("subtitle")
    p.add_argument("body")
    p.add_argument("--status", type=_status, default=Status.NOT_STARTED)

    p = sub.add_parser("edit", help="Edit a card")
    p.add_argument("lane", type=_status)
    p.add_argument("number", type=int)
    p.add_argument("--title")
    p.add_argument("--subtitle")
    p.add_argument("--body")
    p.add_argument("--status", type=_status, default=None)

    p = sub.add_parser("delete", help="Delete a card")
    p.add_argument("lane", type=_status)
    p.add_argument("number", type=int)
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    p = sub.add_parser("drag", help="Drag a card into another lane")
    p.add_argument("lane", type=_status)
    p.add_argument("number", type=int)
    p.add_argument("target", type=_status)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = Config.load(args.config)
    if args.store:
        cfg.store_path = args.store

    logging.basicConfig(
        level=getattr(logging, str(cfg.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger.debug(f"Running {args.command} against {cfg.store_path}")

    board = Board()
    renderer = TextRenderer(board, cfg.column_width, cfg.column_gap)
    controller = BoardController(JsonStore(cfg.store_path), renderer, notify=_notify, board=board)

    if not controller.load_board() and args.command != "show":
        # Refuse to overwrite a store we could not read
        return 1

    try:
        changed = COMMANDS[args.command](controller, renderer, args)
    except (ValidationError, CommandError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if changed and not controller.request_close(lambda: not args.dry_run):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
