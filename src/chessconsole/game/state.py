"""Game session state — the turn controller's context struct."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessconsole.core.board import Board
from chessconsole.core.enums import Color, GameResult, PieceType, PromoteOption
from chessconsole.core.types import Cell
from chessconsole.game.interfaces import GameEndReason, PlayerState


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move log (the log is not an undo stack)."""

    color: Color
    kind: PieceType
    from_cell: Cell
    to_cell: Cell
    promotion: PieceType | None = None
    was_capture: bool = False
    was_check: bool = False


@dataclass
class GameState:
    """Everything the turn controller mutates between key presses.

    This is a pure data class — no rendering, no input handling.
    """

    board: Board = field(default_factory=Board)
    side_to_move: Color = Color.WHITE
    player_state: PlayerState = PlayerState.IDLE
    held: Cell | None = None
    target: Cell | None = None
    promote_option: PromoteOption = PromoteOption.QUEEN
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason = GameEndReason.NONE
    move_history: list[MoveRecord] = field(default_factory=list)

    @property
    def is_game_over(self) -> bool:
        return self.player_state == PlayerState.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def in_check(self) -> bool:
        return self.board.is_in_check(self.side_to_move)

    def drop_selection(self) -> None:
        self.held = None
        self.target = None
