"""Piece — a tagged variant over the six chess piece kinds.

Movement rules are data: per-kind tables of ray directions, step limits and
jump offsets.  ``Piece`` dispatches on its ``kind`` tag instead of relying on
one subclass per kind.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessconsole.core.direction import MAX_RAY_LENGTH, Direction
from chessconsole.core.enums import Color, PieceType
from chessconsole.core.types import Cell, cell_name, cell_x, cell_y, make_cell

if TYPE_CHECKING:
    from chessconsole.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 2),
    (-1, -2),
    (1, 2),
    (1, -2),
    (-2, 1),
    (-2, -1),
    (2, 1),
    (2, -1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, 1), (1, 1), (-1, -1), (1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (-1, 0), (1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# kind -> (directions, max steps per direction)
_RAYS: dict[PieceType, tuple[tuple[tuple[int, int], ...], int]] = {
    PieceType.BISHOP: (BISHOP_DIRS, MAX_RAY_LENGTH),
    PieceType.ROOK: (ROOK_DIRS, MAX_RAY_LENGTH),
    PieceType.QUEEN: (QUEEN_DIRS, MAX_RAY_LENGTH),
    PieceType.KING: (QUEEN_DIRS, 1),
}

# Castling: (rook file, king destination file, files that must be empty)
_CASTLES: tuple[tuple[int, int, tuple[int, ...]], ...] = (
    (0, 2, (1, 2, 3)),
    (7, 6, (5, 6)),
)
KING_HOME_FILE = 4

_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(eq=False, slots=True)
class Piece:
    """A piece in play.

    Identity matters: two white knights are different pieces, so equality and
    hashing are by object identity.  ``cell``, ``hitting`` and
    ``legal_moves`` are derived state rebuilt by :meth:`recalculate` and
    ``Board.turn_start``; the board's cell map stays the source of truth.
    """

    color: Color
    kind: PieceType
    has_moved: bool = False
    cell: Cell | None = None
    hitting: set[Cell] = field(default_factory=set, init=False, repr=False)
    legal_moves: list[Cell] = field(default_factory=list, init=False, repr=False)
    _directions: list[Direction] = field(default_factory=list, init=False, repr=False)
    _jumps: list[Cell] = field(default_factory=list, init=False, repr=False)
    _castles: list[Cell] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def promoted(cls, pawn: Piece, kind: PieceType) -> Piece:
        """Replacement for *pawn*; only ``has_moved`` carries over."""
        return cls(pawn.color, kind, has_moved=pawn.has_moved)

    # ── Placement notifications ──────────────────────────────────────────

    def on_place(self, cell: Cell) -> None:
        """First placement (or promotion). Does not recalculate."""
        self.cell = cell

    def on_move(self, cell: Cell) -> None:
        """The piece was moved onto *cell*. Does not recalculate."""
        self.cell = cell
        self.has_moved = True

    # ── Move generation ──────────────────────────────────────────────────

    def recalculate(self, board: Board) -> None:
        """Drop every registered attack and rebuild from the current cell."""
        board.unregister_hits(self)
        self._directions = []
        self._jumps = []
        self._castles = []
        if self.cell is None:
            return

        if self.kind == PieceType.PAWN:
            self._recalculate_pawn(board)
        elif self.kind == PieceType.KNIGHT:
            self._recalculate_knight(board)
        else:
            directions, max_steps = _RAYS[self.kind]
            self._directions = [
                Direction(board, self, dx, dy, max_steps) for dx, dy in directions
            ]
            if self.kind == PieceType.KING:
                self._recalculate_castling(board)

    def possible_moves(self, board: Board) -> Iterator[Cell]:
        """Pseudo-legal destinations (may leave the own king attacked)."""
        if self.kind == PieceType.PAWN:
            for forward in self._directions:
                yield from forward.possible_moves(enemy_capturable=False)
            for cell in self._jumps:
                if self._pawn_can_take(board, cell):
                    yield cell
            return

        if self.kind == PieceType.KNIGHT:
            for cell in self._jumps:
                occupant = board.piece_at(cell)
                if occupant is None or occupant.color != self.color:
                    yield cell
            return

        for direction in self._directions:
            yield from direction.possible_moves()
        yield from self._castles

    def possible_move_count(self, board: Board) -> int:
        if self.kind == PieceType.PAWN:
            forward = sum(
                d.possible_move_count(enemy_capturable=False) for d in self._directions
            )
            return forward + sum(
                1 for cell in self._jumps if self._pawn_can_take(board, cell)
            )
        if self.kind == PieceType.KNIGHT:
            return sum(1 for _ in self.possible_moves(board))
        return sum(d.possible_move_count() for d in self._directions) + len(
            self._castles
        )

    # ── Attack queries ───────────────────────────────────────────────────

    def is_blocked_if_move(self, from_cell: Cell, to_cell: Cell, blocked: Cell) -> bool:
        """Is *blocked* out of reach after a piece moves *from_cell* → *to_cell*?

        Knight and pawn attacks cannot be interposed. A slider stays a threat
        if any single direction still reaches *blocked*.
        """
        if self.kind in (PieceType.PAWN, PieceType.KNIGHT):
            return blocked not in self._jumps
        return all(
            direction.is_blocked_if_move(from_cell, to_cell, blocked)
            for direction in self._directions
        )

    def x_rays(self, through: Cell, target: Cell) -> bool:
        """Would a line ending on *through* reach *target* once *through* is vacated?"""
        for direction in self._directions:
            if direction.attacking and direction.last == through:
                if target in direction.beyond():
                    return True
        return False

    def slides_along(self, dx: int, dy: int) -> bool:
        """Whether this kind attacks along ``(dx, dy)`` without a step limit."""
        rays = _RAYS.get(self.kind)
        if rays is None or rays[1] < MAX_RAY_LENGTH:
            return False
        return (dx, dy) in rays[0]

    @property
    def castle_targets(self) -> tuple[Cell, ...]:
        return tuple(self._castles)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def char(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        ch = _CHARS[self.kind]
        return ch if self.color == Color.WHITE else ch.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    def __str__(self) -> str:
        return self.char

    def __repr__(self) -> str:
        where = cell_name(self.cell) if self.cell is not None else "-"
        return f"Piece({self.color.name} {self.kind.name} @ {where})"

    # ── Per-kind builders ────────────────────────────────────────────────

    def _recalculate_pawn(self, board: Board) -> None:
        forward = self.color.forward
        self._directions = [
            Direction(
                board,
                self,
                0,
                forward,
                1 if self.has_moved else 2,
                attacking=False,
            )
        ]
        for dx in (-1, 1):
            cell = board.adjacent(self.cell, dx, forward)
            if cell is not None:
                self._jumps.append(cell)
                board.register_hit(cell, self)

    def _recalculate_knight(self, board: Board) -> None:
        for dx, dy in KNIGHT_OFFSETS:
            cell = board.adjacent(self.cell, dx, dy)
            if cell is not None:
                self._jumps.append(cell)
                board.register_hit(cell, self)

    def _recalculate_castling(self, board: Board) -> None:
        y = self.color.home_rank
        if self.has_moved or self.cell != make_cell(KING_HOME_FILE, y):
            return

        for rook_x, target_x, between in _CASTLES:
            rook = board.piece_at(make_cell(rook_x, y))
            if (
                rook is None
                or rook.kind != PieceType.ROOK
                or rook.color != self.color
                or rook.has_moved
            ):
                continue
            if any(board.piece_at(make_cell(x, y)) is not None for x in between):
                continue
            self._castles.append(make_cell(target_x, y))

    def _pawn_can_take(self, board: Board, cell: Cell) -> bool:
        occupant = board.piece_at(cell)
        if occupant is not None:
            return occupant.color != self.color
        if cell != board.en_passant or board.en_passant_capture is None:
            return False
        victim = board.piece_at(board.en_passant_capture)
        return victim is not None and victim.color != self.color


def home_cell_moved(color: Color, kind: PieceType, cell: Cell) -> bool:
    """Default ``has_moved`` for a piece set up on *cell*.

    Pawns off their second rank, a king off its home cell and rooks off their
    home corners count as having moved.
    """
    x, y = cell_x(cell), cell_y(cell)
    if kind == PieceType.PAWN:
        return y != color.home_rank + color.forward
    if kind == PieceType.KING:
        return (x, y) != (KING_HOME_FILE, color.home_rank)
    if kind == PieceType.ROOK:
        return y != color.home_rank or x not in (0, 7)
    return False
