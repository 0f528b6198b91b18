"""GameController — the turn state machine of a console chess game.

Idle → (piece selected) → Holding → (destination chosen) → move applied → Idle,
with an AwaitPromote detour for pawn promotions and a terminal GameOver state.
Emits events via simple callbacks so the renderer / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessconsole.core.board import Board
from chessconsole.core.enums import GameResult, PieceType, PromoteOption
from chessconsole.core.rules import Rules
from chessconsole.core.types import Cell, cell_name
from chessconsole.game.interfaces import (
    GameEndReason,
    GameOptions,
    IGameController,
    PlayerState,
)
from chessconsole.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
StateCallback = Callable[[PlayerState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_state_changed: list[StateCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns a :class:`GameState` and advances it one interaction at a time.

    Single-threaded: every method runs to completion on the caller's thread.
    """

    __slots__ = ("_state", "_options", "events")

    def __init__(self, options: GameOptions | None = None) -> None:
        self._options = options or GameOptions()
        self._state = GameState(
            side_to_move=self._options.first_player,
            promote_option=self._options.default_promotion,
        )
        self.events = GameEvents()
        self._start_turn()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def options(self) -> GameOptions:
        return self._options

    @property
    def held_moves(self) -> list[Cell]:
        """Legal destinations of the held piece (empty when nothing is held)."""
        if self._state.held is None:
            return []
        piece = self._state.board.piece_at(self._state.held)
        if piece is None:
            return []
        return self._state.board.legal_moves_of(piece)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, board: Board | None = None) -> None:
        if board is None:
            self._state.board.reset()
        else:
            self._state.board = board
        self._state.side_to_move = self._options.first_player
        self._state.player_state = PlayerState.IDLE
        self._state.drop_selection()
        self._state.promote_option = self._options.default_promotion
        self._state.result = GameResult.IN_PROGRESS
        self._state.end_reason = GameEndReason.NONE
        self._state.move_history.clear()
        if not self._check_game_over(self._start_turn()):
            self._emit_state(PlayerState.IDLE)

    def select(self, cell: Cell) -> bool:
        state = self._state
        phase = state.player_state

        if phase == PlayerState.IDLE:
            piece = state.board.piece_at(cell)
            if (
                piece is None
                or piece.color != state.side_to_move
                or not piece.legal_moves
            ):
                return False
            state.held = cell
            self._set_state(PlayerState.HOLDING)
            return True

        if phase == PlayerState.HOLDING:
            if cell not in self.held_moves:
                return False
            state.target = cell
            if state.board.is_promotable(state.held, cell):
                state.promote_option = self._options.default_promotion
                self._set_state(PlayerState.AWAIT_PROMOTE)
                return True
            self._finish_turn()
            return True

        if phase == PlayerState.AWAIT_PROMOTE:
            self._finish_turn()
            return True

        return False

    def cancel(self) -> None:
        if self._state.player_state == PlayerState.GAME_OVER:
            return
        self._state.drop_selection()
        self._set_state(PlayerState.IDLE)

    def cycle_promotion(self, step: int) -> PromoteOption:
        if self._state.player_state != PlayerState.AWAIT_PROMOTE:
            return self._state.promote_option
        current = int(self._state.promote_option) + step
        clamped = min(max(current, PromoteOption.QUEEN), PromoteOption.KNIGHT)
        self._state.promote_option = PromoteOption(clamped)
        return self._state.promote_option

    def choose_promotion(self, option: PromoteOption) -> bool:
        if self._state.player_state != PlayerState.AWAIT_PROMOTE:
            return False
        try:
            option = PromoteOption(option)
        except ValueError:
            return False
        self._state.promote_option = option
        self._finish_turn()
        return True

    def submit_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PromoteOption | None = None,
    ) -> bool:
        state = self._state
        if state.is_game_over:
            return False

        piece = state.board.piece_at(from_cell)
        if piece is None or piece.color != state.side_to_move:
            return False
        if to_cell not in piece.legal_moves:
            return False

        option = self._options.default_promotion
        if promotion is not None and state.board.is_promotable(from_cell, to_cell):
            try:
                option = PromoteOption(promotion)
            except ValueError:
                return False

        # replaces any selection made through select()
        state.drop_selection()
        state.held = from_cell
        state.target = to_cell
        state.promote_option = option
        self._finish_turn()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _finish_turn(self) -> None:
        """Apply the held move, pass the turn and classify the new position."""
        state = self._state
        board = state.board
        from_cell, to_cell = state.held, state.target
        mover = board.piece_at(from_cell)
        was_capture = board.piece_at(to_cell) is not None or (
            to_cell == board.en_passant and mover.kind == PieceType.PAWN
        )
        promotes = board.is_promotable(from_cell, to_cell)

        board.move(from_cell, to_cell, state.promote_option)
        state.drop_selection()
        state.side_to_move = state.side_to_move.opposite
        has_moves = self._start_turn()

        record = MoveRecord(
            color=mover.color,
            kind=mover.kind,
            from_cell=from_cell,
            to_cell=to_cell,
            promotion=state.promote_option.piece_type if promotes else None,
            was_capture=was_capture,
            was_check=board.is_in_check(state.side_to_move),
        )
        state.move_history.append(record)
        self._emit_move(record)

        if self._check_game_over(has_moves):
            return
        self._set_state(PlayerState.IDLE)

    def _start_turn(self) -> bool:
        return self._state.board.turn_start(self._state.side_to_move)

    def _check_game_over(self, has_moves: bool) -> bool:
        state = self._state
        result = Rules.game_result(state.board, state.side_to_move, has_moves)
        if result == GameResult.IN_PROGRESS:
            return False
        if has_moves and not self._options.auto_draw_insufficient_material:
            return False

        if not has_moves:
            in_check = state.board.is_in_check(state.side_to_move)
            reason = GameEndReason.CHECKMATE if in_check else GameEndReason.STALEMATE
        else:
            reason = GameEndReason.INSUFFICIENT_MATERIAL

        state.result = result
        state.end_reason = reason
        _LOGGER.info(
            "Game over after %d plies: %s (%s)",
            state.ply_count,
            result.name,
            reason.name,
        )
        self._set_state(PlayerState.GAME_OVER)
        self._emit_game_over(result)
        return True

    def _set_state(self, player_state: PlayerState) -> None:
        self._state.player_state = player_state
        self._emit_state(player_state)

    def _emit_move(self, record: MoveRecord) -> None:
        _LOGGER.debug(
            "%s %s %s-%s",
            record.color,
            record.kind.name,
            cell_name(record.from_cell),
            cell_name(record.to_cell),
        )
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_state(self, player_state: PlayerState) -> None:
        for cb in self.events.on_state_changed:
            cb(player_state)
