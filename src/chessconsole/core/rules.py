"""Move legality and end-of-game classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessconsole.core.enums import Color, GameResult, PieceType
from chessconsole.core.piece import QUEEN_DIRS
from chessconsole.core.types import Cell, cell_x, cell_y, is_light, make_cell, offset

if TYPE_CHECKING:
    from chessconsole.core.board import Board
    from chessconsole.core.piece import Piece

_MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Legality is decided against the attack map built by the last
    ``Board.turn_start``; nothing here mutates the board.
    """

    @staticmethod
    def is_move_legal(board: Board, piece: Piece, to_cell: Cell) -> bool:
        """Would moving *piece* to *to_cell* keep its own king safe?

        *to_cell* must already be one of the piece's pseudo-legal moves.
        """
        if piece.kind == PieceType.KING:
            return Rules._is_king_move_legal(board, piece, to_cell)

        from_cell = piece.cell
        king_cell = board.king(piece.color).cell
        en_passant = piece.kind == PieceType.PAWN and to_cell == board.en_passant
        captured = board.en_passant_capture if en_passant else to_cell

        if board.is_in_check(piece.color):
            # Every checker must be taken or shut out.
            for attacker in board.hit_by(king_cell):
                if attacker.color == piece.color or attacker.cell == captured:
                    continue
                if not attacker.is_blocked_if_move(from_cell, to_cell, king_cell):
                    return False

        # Lifting the piece must not open a line onto the king.
        for attacker in board.hit_by(from_cell):
            if attacker.color == piece.color or attacker.cell == captured:
                continue
            if not attacker.is_blocked_if_move(from_cell, to_cell, king_cell):
                return False

        if en_passant and Rules._exposes_king(
            board, king_cell, piece.color, vacated=(from_cell, captured), filled=to_cell
        ):
            return False

        return True

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        """Runs a full ``turn_start`` for *color*."""
        has_moves = board.turn_start(color)
        return not has_moves and board.is_in_check(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        """Runs a full ``turn_start`` for *color*."""
        has_moves = board.turn_start(color)
        return not has_moves and not board.is_in_check(color)

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        pieces = board.pieces()
        others = [p for p in pieces if p.kind != PieceType.KING]

        if not others:
            return True

        if len(others) == 1:
            return others[0].kind in _MINOR_PIECES

        if len(others) == 2:
            a, b = others
            if a.kind == b.kind == PieceType.BISHOP and a.color != b.color:
                return is_light(a.cell) == is_light(b.cell)

        return False

    @staticmethod
    def game_result(board: Board, color: Color, has_legal_move: bool) -> GameResult:
        """Classify the position for *color* to move.

        *has_legal_move* is the value returned by ``turn_start(color)``.
        """
        if not has_legal_move:
            if board.is_in_check(color):
                return (
                    GameResult.BLACK_WINS
                    if color == Color.WHITE
                    else GameResult.WHITE_WINS
                )
            return GameResult.DRAW  # stalemate

        if Rules.is_insufficient_material(board):
            return GameResult.DRAW

        return GameResult.IN_PROGRESS

    # ── Internal ─────────────────────────────────────────────────────────

    @staticmethod
    def _is_king_move_legal(board: Board, king: Piece, to_cell: Cell) -> bool:
        from_cell = king.cell

        if any(hitter.color != king.color for hitter in board.hit_by(to_cell)):
            return False

        # A slider checking the king still covers the cell behind it.
        for hitter in board.hit_by(from_cell):
            if hitter.color != king.color and hitter.x_rays(from_cell, to_cell):
                return False

        dx = cell_x(to_cell) - cell_x(from_cell)
        if abs(dx) == 2:
            if board.is_in_check(king.color):
                return False
            transit = make_cell(cell_x(from_cell) + dx // 2, cell_y(from_cell))
            if any(hitter.color != king.color for hitter in board.hit_by(transit)):
                return False

        return True

    @staticmethod
    def _exposes_king(
        board: Board,
        king_cell: Cell,
        color: Color,
        vacated: tuple[Cell | None, ...],
        filled: Cell,
    ) -> bool:
        """Scan outward from the king with *vacated* emptied and *filled* occupied."""
        for dx, dy in QUEEN_DIRS:
            cell = offset(king_cell, dx, dy)
            while cell is not None:
                if cell == filled:
                    break
                occupant = None if cell in vacated else board.piece_at(cell)
                if occupant is not None:
                    if occupant.color != color and occupant.slides_along(-dx, -dy):
                        return True
                    break
                cell = offset(cell, dx, dy)
        return False
