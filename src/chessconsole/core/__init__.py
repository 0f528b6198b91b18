"""Core domain layer — chess rules and legality, zero external dependencies.

Quick start::

    from chessconsole.core import Board, Color

    board = Board()
    board.turn_start(Color.WHITE)
    for piece in board.pieces(Color.WHITE):
        print(piece, board.legal_moves_of(piece))
"""

from chessconsole.core.board import Board
from chessconsole.core.direction import Direction
from chessconsole.core.enums import Color, GameResult, PieceType, PromoteOption
from chessconsole.core.piece import Piece
from chessconsole.core.rules import Rules
from chessconsole.core.types import (
    Cell,
    cell_name,
    cell_x,
    cell_y,
    make_cell,
    parse_cell,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    "PromoteOption",
    # Types / helpers
    "Cell",
    "cell_name",
    "cell_x",
    "cell_y",
    "make_cell",
    "parse_cell",
    # Domain objects
    "Board",
    "Direction",
    "Piece",
    "Rules",
]
