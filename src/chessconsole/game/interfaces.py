"""Abstract interfaces and shared types for the game layer.

The console front end (rendering, key polling, cursor) depends on
``IGameController``; it never makes chess decisions itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessconsole.core.enums import Color, PromoteOption

if TYPE_CHECKING:
    from chessconsole.core.board import Board
    from chessconsole.core.types import Cell


# ── Turn FSM states ──────────────────────────────────────────────────────────


class PlayerState(IntEnum):
    """What the side to move is currently doing."""

    IDLE = auto()
    HOLDING = auto()  # a piece is selected
    AWAIT_PROMOTE = auto()  # destination chosen, promotion menu open
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()


# ── Options ──────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class GameOptions:
    """Behaviour knobs for a game session."""

    first_player: Color = Color.WHITE
    default_promotion: PromoteOption = PromoteOption.QUEEN
    auto_draw_insufficient_material: bool = True


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface the console loop drives once per key press."""

    @abstractmethod
    def new_game(self, board: Board | None = None) -> None:
        """Start over with the first player to move.

        *board* replaces the standard starting position when given.
        """

    @abstractmethod
    def select(self, cell: Cell) -> bool:
        """Confirm on *cell*. Returns True if the interaction was accepted."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the held piece and return to idle."""

    @abstractmethod
    def cycle_promotion(self, step: int) -> PromoteOption:
        """Move the promotion menu selection by *step* entries.

        Only while a promotion is pending; otherwise the current option is
        returned unchanged.
        """

    @abstractmethod
    def choose_promotion(self, option: PromoteOption) -> bool:
        """Pick *option* and complete the pending promotion."""

    @abstractmethod
    def submit_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PromoteOption | None = None,
    ) -> bool:
        """Submit a move directly. Returns True if legal and applied.

        Accepted in any state but GameOver. A piece held or a promotion
        pending through :meth:`select` is dropped in favour of this move.
        """
