"""Tests for cell helpers and core enums."""

import pytest

from chessconsole.core.enums import Color, PieceType, PromoteOption
from chessconsole.core.types import (
    A1,
    E4,
    H1,
    H8,
    cell_name,
    cell_x,
    cell_y,
    in_bounds,
    is_light,
    make_cell,
    offset,
    parse_cell,
)


class TestCells:
    def test_corners(self) -> None:
        assert A1 == 0
        assert H8 == 63
        assert make_cell(7, 0) == H1

    def test_coordinates(self) -> None:
        assert (cell_x(E4), cell_y(E4)) == (4, 3)

    def test_names_round_trip(self) -> None:
        assert cell_name(E4) == "e4"
        assert parse_cell("h8") == H8

    @pytest.mark.parametrize("name", ["", "e", "e9", "i1", "E4", "e44"])
    def test_bad_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_cell(name)

    def test_bounds(self) -> None:
        assert in_bounds(0, 7)
        assert not in_bounds(8, 0)
        assert not in_bounds(0, -1)

    def test_offset(self) -> None:
        assert offset(E4, 1, 1) == parse_cell("f5")
        assert offset(H8, 1, 0) is None
        assert offset(A1, 0, -1) is None

    def test_light_squares(self) -> None:
        assert is_light(H1)
        assert not is_light(A1)
        assert not is_light(H8)


class TestEnums:
    def test_color_helpers(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.BLACK.forward == -1
        assert Color.BLACK.home_rank == 7
        assert Color.WHITE.promotion_rank == 7
        assert str(Color.BLACK) == "black"

    def test_promote_options_in_menu_order(self) -> None:
        assert [o.piece_type for o in PromoteOption] == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        ]

    def test_unknown_promote_option(self) -> None:
        with pytest.raises(ValueError):
            PromoteOption(4)
