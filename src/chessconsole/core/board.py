"""Board — the 8x8 cell grid, the piece roster and the live attack map."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from chessconsole.core.enums import Color, PieceType, PromoteOption
from chessconsole.core.piece import Piece, home_cell_moved
from chessconsole.core.rules import Rules
from chessconsole.core.types import (
    BOARD_SIZE,
    Cell,
    cell_name,
    cell_x,
    cell_y,
    in_bounds,
    make_cell,
    offset,
)

_LOGGER = logging.getLogger(__name__)

_CELL_COUNT = BOARD_SIZE * BOARD_SIZE

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable chess board with an incrementally maintained attack map.

    The cell → piece mapping is authoritative.  Each piece's cell, the
    per-cell hit-by sets and each piece's ``hitting`` set are derived from it
    and rebuilt by :meth:`recalculate` (and therefore :meth:`turn_start`).

    A new board holds the standard starting position.
    """

    __slots__ = (
        "_squares",
        "_hit_by",
        "_pieces",
        "_kings",
        "_en_passant",
        "_en_passant_capture",
        "_in_check",
        "_checked_color",
    )

    def __init__(self) -> None:
        self.reset()

    @classmethod
    def empty(cls) -> Board:
        """A board with no pieces, ready for :meth:`place`."""
        board = cls.__new__(cls)
        board.clear()
        return board

    # -- Cell access --------------------------------------------------------

    def cell_at(self, x: int, y: int) -> Cell | None:
        """Cell at absolute ``(x, y)``, or ``None`` when out of bounds."""
        if not in_bounds(x, y):
            return None
        return make_cell(x, y)

    def adjacent(self, cell: Cell, dx: int, dy: int) -> Cell | None:
        """Cell at ``(dx, dy)`` relative to *cell*, or ``None``."""
        return offset(cell, dx, dy)

    def ray(self, cell: Cell, dx: int, dy: int, max_steps: int = 1) -> Iterator[Cell]:
        """Cells in line of sight from *cell* along ``(dx, dy)``.

        Stops at the board edge, and right after the first occupied cell.
        """
        x, y = cell_x(cell), cell_y(cell)
        for step in range(1, max_steps + 1):
            nx, ny = x + dx * step, y + dy * step
            if not in_bounds(nx, ny):
                return
            target = make_cell(nx, ny)
            yield target
            if self._squares[target] is not None:
                return

    def piece_at(self, cell: Cell) -> Piece | None:
        return self._squares[cell]

    def is_empty(self, cell: Cell) -> bool:
        return self._squares[cell] is None

    # -- Roster / attack map queries ----------------------------------------

    def hit_by(self, cell: Cell) -> frozenset[Piece]:
        """Pieces currently attacking *cell*."""
        return frozenset(self._hit_by[cell])

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces in play, optionally only *color*'s."""
        if color is None:
            return list(self._pieces)
        return [p for p in self._pieces if p.color == color]

    def king(self, color: Color) -> Piece:
        """Return the single king of *color*."""
        king = self._kings.get(color)
        if king is None:
            raise ValueError(f"No {color.name} king on board")
        return king

    def legal_moves_of(self, piece: Piece) -> list[Cell]:
        """Legal destinations computed by the last :meth:`turn_start`."""
        return list(piece.legal_moves)

    @property
    def en_passant(self) -> Cell | None:
        """Cell a pawn may move onto to capture en passant."""
        return self._en_passant

    @property
    def en_passant_capture(self) -> Cell | None:
        """Cell of the pawn captured by an en passant move."""
        return self._en_passant_capture

    # -- Attack map maintenance ---------------------------------------------

    def register_hit(self, cell: Cell, piece: Piece) -> None:
        self._hit_by[cell].add(piece)
        piece.hitting.add(cell)

    def unregister_hits(self, piece: Piece) -> None:
        for cell in piece.hitting:
            self._hit_by[cell].discard(piece)
        piece.hitting.clear()

    def recalculate(self) -> None:
        """Rebuild every piece's rays and the whole attack map."""
        for hits in self._hit_by:
            hits.clear()
        for piece in self._pieces:
            piece.hitting.clear()
            piece.recalculate(self)

    # -- Setup --------------------------------------------------------------

    def reset(self) -> None:
        """Standard starting position, fully recalculated."""
        self.clear()
        for x, kind in enumerate(_BACK_RANK):
            self.place(make_cell(x, 0), Color.WHITE, kind)
            self.place(make_cell(x, 7), Color.BLACK, kind)
        for x in range(BOARD_SIZE):
            self.place(make_cell(x, 1), Color.WHITE, PieceType.PAWN)
            self.place(make_cell(x, 6), Color.BLACK, PieceType.PAWN)
        self.recalculate()

    def clear(self) -> None:
        self._squares = [None] * _CELL_COUNT
        self._hit_by = [set() for _ in range(_CELL_COUNT)]
        self._pieces = []
        self._kings = {}
        self._en_passant = None
        self._en_passant_capture = None
        self._in_check = False
        self._checked_color = None

    def place(
        self,
        cell: Cell,
        color: Color,
        kind: PieceType,
        has_moved: bool | None = None,
    ) -> Piece:
        """Put a new piece on an empty *cell*.

        When *has_moved* is ``None`` it is inferred from the cell (see
        :func:`home_cell_moved`).  Attacks are not registered until the next
        :meth:`recalculate` / :meth:`turn_start`.
        """
        if self._squares[cell] is not None:
            raise ValueError(f"Cell {cell_name(cell)} is already occupied")
        if kind == PieceType.KING and color in self._kings:
            raise ValueError(f"{color.name} already has a king")
        if has_moved is None:
            has_moved = home_cell_moved(color, kind, cell)
        piece = Piece(color, kind, has_moved=has_moved)
        self._add_piece(cell, piece)
        return piece

    def copy(self) -> Board:
        """Independent board with the same placement, flags and en passant state."""
        board = Board.empty()
        for piece in self._pieces:
            board.place(piece.cell, piece.color, piece.kind, piece.has_moved)
        board._en_passant = self._en_passant
        board._en_passant_capture = self._en_passant_capture
        board._in_check = self._in_check
        board._checked_color = self._checked_color
        board.recalculate()
        return board

    # -- Turn cycle ---------------------------------------------------------

    def turn_start(self, color: Color) -> bool:
        """Rebuild the attack map and every legal move for *color*.

        Must run at the start of every turn before legal-move lists are read.
        Returns whether *color* has any legal move.
        """
        self.recalculate()
        self._in_check = self.is_in_check(color, use_cache=False)
        self._checked_color = color

        any_legal = False
        for piece in self._pieces:
            piece.legal_moves.clear()
            if piece.color != color:
                continue
            for target in piece.possible_moves(self):
                if Rules.is_move_legal(self, piece, target):
                    piece.legal_moves.append(target)
            any_legal = any_legal or bool(piece.legal_moves)

        _LOGGER.debug(
            "Turn start for %s: in_check=%s, legal moves=%d",
            color,
            self._in_check,
            sum(len(p.legal_moves) for p in self._pieces),
        )
        return any_legal

    def is_in_check(self, color: Color, use_cache: bool = True) -> bool:
        """Is *color*'s king attacked?

        With *use_cache* the value computed by the last :meth:`turn_start` is
        returned when that turn was *color*'s.
        """
        if use_cache and self._checked_color == color:
            return self._in_check
        king = self.king(color)
        return any(hitter.color != color for hitter in self._hit_by[king.cell])

    def is_promotable(self, from_cell: Cell, to_cell: Cell) -> bool:
        """Would the piece on *from_cell* promote by moving to *to_cell*?"""
        piece = self._squares[from_cell]
        return (
            piece is not None
            and piece.kind == PieceType.PAWN
            and cell_y(to_cell) == piece.color.promotion_rank
        )

    def move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PromoteOption = PromoteOption.QUEEN,
    ) -> None:
        """Apply a move taken from the mover's legal-move list.

        Legality is not checked here.  *promotion* is ignored unless the move
        promotes; an unknown option is rejected before the board changes.
        """
        piece = self._squares[from_cell]
        if piece is None:
            raise ValueError(f"No piece on {cell_name(from_cell)}")

        promotes = self.is_promotable(from_cell, to_cell)
        if promotes:
            try:
                promotion = PromoteOption(promotion)
            except ValueError:
                raise ValueError(f"Invalid promotion option: {promotion!r}") from None

        if self._squares[to_cell] is not None:
            self._remove_piece(to_cell)

        self._squares[to_cell] = piece
        self._squares[from_cell] = None

        if piece.kind == PieceType.PAWN and to_cell == self._en_passant:
            _LOGGER.debug("En passant on %s", cell_name(to_cell))
            if self._squares[self._en_passant_capture] is not None:
                self._remove_piece(self._en_passant_capture)

        dx = cell_x(to_cell) - cell_x(from_cell)
        if piece.kind == PieceType.KING and abs(dx) == 2:
            y = cell_y(to_cell)
            if dx > 0:
                self.move(make_cell(7, y), make_cell(cell_x(to_cell) - 1, y))
            else:
                self.move(make_cell(0, y), make_cell(cell_x(to_cell) + 1, y))
            _LOGGER.debug("%s castles to %s", piece.color, cell_name(to_cell))

        if promotes:
            promoted = Piece.promoted(piece, promotion.piece_type)
            self._remove_piece(to_cell)
            self._add_piece(to_cell, promoted)
            piece = promoted
            _LOGGER.debug("Promotion to %s on %s", promoted.kind.name, cell_name(to_cell))

        # Last, so the recalculated rays see the finished board.
        piece.on_move(to_cell)
        piece.recalculate(self)

        self._en_passant = None
        self._en_passant_capture = None
        if piece.kind == PieceType.PAWN and abs(cell_y(to_cell) - cell_y(from_cell)) == 2:
            self._en_passant = make_cell(
                cell_x(to_cell), (cell_y(from_cell) + cell_y(to_cell)) // 2
            )
            self._en_passant_capture = to_cell

        _LOGGER.debug(
            "Moved %r from %s to %s", piece, cell_name(from_cell), cell_name(to_cell)
        )

    # -- Internal -----------------------------------------------------------

    def _add_piece(self, cell: Cell, piece: Piece) -> None:
        self._squares[cell] = piece
        self._pieces.append(piece)
        piece.on_place(cell)
        if piece.kind == PieceType.KING:
            self._kings[piece.color] = piece

    def _remove_piece(self, cell: Cell) -> None:
        piece = self._squares[cell]
        self._squares[cell] = None
        self._pieces.remove(piece)
        self.unregister_hits(piece)
        piece.legal_moves.clear()
        piece.cell = None
        if self._kings.get(piece.color) is piece:
            del self._kings[piece.color]

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for x in range(BOARD_SIZE):
                p = self._squares[make_cell(x, y)]
                row.append(p.char if p else ".")
            rows.append(f"{y + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
