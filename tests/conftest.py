"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessconsole.core.board import Board
from chessconsole.core.enums import Color, PieceType
from chessconsole.core.types import parse_cell

_KINDS: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}


def place_pieces(layout: dict[str, str]) -> Board:
    """Build a board from ``{"e1": "K", "e8": "k", ...}``.

    Uppercase letters are white, lowercase black.  ``has_moved`` is inferred
    from each piece's cell.
    """
    board = Board.empty()
    for name, char in layout.items():
        color = Color.WHITE if char.isupper() else Color.BLACK
        board.place(parse_cell(name), color, _KINDS[char.lower()])
    board.recalculate()
    return board


def layout_from_rows(placement: str) -> dict[str, str]:
    """Expand a slash-separated placement (rank 8 first) into a layout dict.

    ``"4k3/8/8/8/8/8/8/4K3"`` → ``{"e8": "k", "e1": "K"}``
    """
    layout: dict[str, str] = {}
    for row, rank in enumerate(placement.split("/")):
        x = 0
        for ch in rank:
            if ch.isdigit():
                x += int(ch)
                continue
            layout[f"{'abcdefgh'[x]}{8 - row}"] = ch
            x += 1
    return layout


@pytest.fixture
def board() -> Board:
    """Fresh board in the starting position."""
    return Board()


@pytest.fixture
def make_board() -> Callable[[dict[str, str]], Board]:
    """Factory building a board from a cell → piece-letter layout."""
    return place_pieces
