"""Cell handle type and coordinate helpers.

Cells are stable integer handles into the 8x8 grid:
    a1=0, b1=1, ..., h1=7
    a2=8, ...
    a8=56, ..., h8=63

``x`` is the file (0-7 -> a-h), ``y`` the rank (0-7 -> 1-8).
"""

from __future__ import annotations

from typing import TypeAlias

Cell: TypeAlias = int  # 0–63

BOARD_SIZE = 8


def cell_x(cell: Cell) -> int:
    """File index 0–7 (a–h)."""
    return cell & 7


def cell_y(cell: Cell) -> int:
    """Rank index 0–7 (1–8)."""
    return cell >> 3


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def make_cell(x: int, y: int) -> Cell:
    """Create a cell handle from file and rank indices (both 0–7)."""
    return y * BOARD_SIZE + x


def offset(cell: Cell, dx: int, dy: int) -> Cell | None:
    """Cell at ``(dx, dy)`` relative to *cell*, or ``None`` off the board."""
    x = cell_x(cell) + dx
    y = cell_y(cell) + dy
    if not in_bounds(x, y):
        return None
    return make_cell(x, y)


def cell_name(cell: Cell) -> str:
    """Human-readable name, e.g. 0 → 'a1', 63 → 'h8'."""
    return "abcdefgh"[cell_x(cell)] + str(cell_y(cell) + 1)


def parse_cell(name: str) -> Cell:
    """Parse a cell name, e.g. 'e4' → 28."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid cell name: {name!r}")
    return make_cell(ord(name[0]) - ord("a"), int(name[1]) - 1)


def is_light(cell: Cell) -> bool:
    """Whether *cell* is a light square (h1 is light)."""
    return (cell_x(cell) + cell_y(cell)) % 2 == 1


# ── Named cells ──────────────────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)
