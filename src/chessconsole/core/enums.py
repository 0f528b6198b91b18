"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction pawns of this color advance in."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Rank index of the back rank (0 for white, 7 for black)."""
        return 0 if self == Color.WHITE else 7

    @property
    def promotion_rank(self) -> int:
        """Rank index a pawn of this color promotes on."""
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class PromoteOption(IntEnum):
    """Promotion menu entries, in menu order."""

    QUEEN = 0
    ROOK = 1
    BISHOP = 2
    KNIGHT = 3

    @property
    def piece_type(self) -> PieceType:
        return _PROMOTE_TYPES[self]


_PROMOTE_TYPES: dict[PromoteOption, PieceType] = {
    PromoteOption.QUEEN: PieceType.QUEEN,
    PromoteOption.ROOK: PieceType.ROOK,
    PromoteOption.BISHOP: PieceType.BISHOP,
    PromoteOption.KNIGHT: PieceType.KNIGHT,
}


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
