"""Direction — one piece's line of sight along a single unit vector."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessconsole.core.types import Cell

if TYPE_CHECKING:
    from chessconsole.core.board import Board
    from chessconsole.core.piece import Piece

MAX_RAY_LENGTH = 8


class Direction:
    """Cells reachable by *piece* along ``(dx, dy)``, up to *max_steps*.

    The ray is materialised once on construction and includes the first
    occupied cell (friend or foe), which blocks anything further.  When
    *attacking* is true every traversed cell registers *piece* in the board's
    attack map; movement-only rays (the pawn push) register nothing.
    """

    __slots__ = ("piece", "dx", "dy", "max_steps", "attacking", "_board", "_cells")

    def __init__(
        self,
        board: Board,
        piece: Piece,
        dx: int,
        dy: int,
        max_steps: int = MAX_RAY_LENGTH,
        attacking: bool = True,
    ) -> None:
        if piece.cell is None:
            raise ValueError(f"Cannot open a direction for an unplaced {piece!r}")
        self.piece = piece
        self.dx = dx
        self.dy = dy
        self.max_steps = max_steps
        self.attacking = attacking
        self._board = board
        self._cells: tuple[Cell, ...] = tuple(board.ray(piece.cell, dx, dy, max_steps))

        if attacking:
            for cell in self._cells:
                board.register_hit(cell, piece)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Every cell in line of sight, including the blocking one."""
        return self._cells

    @property
    def last(self) -> Cell | None:
        return self._cells[-1] if self._cells else None

    def possible_moves(self, enemy_capturable: bool = True) -> Iterator[Cell]:
        """Empty cells in the ray, then the blocker if it may be captured."""
        cells = self._cells
        if not cells:
            return
        yield from cells[:-1]
        if self._can_end_on(cells[-1], enemy_capturable):
            yield cells[-1]

    def possible_move_count(self, enemy_capturable: bool = True) -> int:
        cells = self._cells
        if not cells:
            return 0
        if self._can_end_on(cells[-1], enemy_capturable):
            return len(cells)
        return len(cells) - 1

    def beyond(self) -> Iterator[Cell]:
        """Cells the line would reach if its final occupant were lifted."""
        cells = self._cells
        remaining = self.max_steps - len(cells)
        if not cells or remaining <= 0:
            return iter(())
        return self._board.ray(cells[-1], self.dx, self.dy, remaining)

    # ── Incremental legality ─────────────────────────────────────────────

    def is_blocked_if_move(self, from_cell: Cell, to_cell: Cell, blocked: Cell) -> bool:
        """Would this ray be kept off *blocked* after a piece moves *from_cell* → *to_cell*?

        Evaluated against the current board without mutating it.
        """
        cells = self._cells

        # Already reaching blocked, and the move drops nothing into the ray.
        # to_cell may equal blocked; that is the caller's concern.
        if blocked in cells and to_cell not in cells:
            return False

        if from_cell in cells:
            # from_cell is always the blocker at the end of the ray
            if to_cell in cells and cells.index(to_cell) < len(cells) - 1:
                return True

            for cell in self._board.ray(
                from_cell, self.dx, self.dy, self.max_steps - len(cells)
            ):
                if cell == to_cell:
                    return True
                if cell == blocked:
                    return False

        # Neither the mover nor the target concerns this ray.
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _can_end_on(self, cell: Cell, enemy_capturable: bool) -> bool:
        occupant = self._board.piece_at(cell)
        if occupant is None:
            return True
        return enemy_capturable and occupant.color != self.piece.color

    def __repr__(self) -> str:
        return (
            f"Direction({self.piece!r}, dx={self.dx}, dy={self.dy}, "
            f"cells={len(self._cells)})"
        )
