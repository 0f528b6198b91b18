"""Tests for Board: setup, cell access, the attack map and move application."""

import pytest

from conftest import place_pieces

from chessconsole.core.board import Board
from chessconsole.core.enums import Color, PieceType, PromoteOption
from chessconsole.core.types import (
    A1,
    A2,
    A7,
    A8,
    B1,
    B2,
    C1,
    C3,
    D1,
    D2,
    D5,
    D6,
    D7,
    E1,
    E2,
    E3,
    E4,
    E5,
    E8,
    F1,
    F2,
    G1,
    H1,
    H8,
    cell_y,
)


class TestReset:
    def test_sixteen_pieces_per_side(self, board: Board) -> None:
        assert len(board.pieces(Color.WHITE)) == 16
        assert len(board.pieces(Color.BLACK)) == 16

    def test_one_king_each(self, board: Board) -> None:
        for color in Color:
            kings = [p for p in board.pieces(color) if p.kind == PieceType.KING]
            assert len(kings) == 1
            assert board.king(color) is kings[0]

    def test_pawns_on_second_ranks(self, board: Board) -> None:
        for piece in board.pieces():
            if piece.kind != PieceType.PAWN:
                continue
            expected = 1 if piece.color == Color.WHITE else 6
            assert cell_y(piece.cell) == expected

    def test_back_rank_order(self, board: Board) -> None:
        kinds = [board.piece_at(cell).kind for cell in range(A1, H1 + 1)]
        assert kinds == [
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        ]

    def test_nothing_has_moved(self, board: Board) -> None:
        assert not any(p.has_moved for p in board.pieces())

    def test_white_has_moves_and_is_not_in_check(self, board: Board) -> None:
        assert board.turn_start(Color.WHITE)
        assert not board.is_in_check(Color.WHITE)

    def test_twenty_opening_moves(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        total = sum(len(board.legal_moves_of(p)) for p in board.pieces(Color.WHITE))
        assert total == 20

    def test_idle_side_has_empty_lists(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        assert all(not p.legal_moves for p in board.pieces(Color.BLACK))

    def test_reset_after_play(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        board.reset()
        assert board.piece_at(E4) is None
        assert board.piece_at(E2).kind == PieceType.PAWN
        assert board.en_passant is None


class TestCellAccess:
    def test_cell_at_in_range(self, board: Board) -> None:
        assert board.cell_at(4, 3) == E4

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (8, 0), (0, 8), (9, 9)])
    def test_cell_at_out_of_range(self, board: Board, x: int, y: int) -> None:
        assert board.cell_at(x, y) is None

    def test_adjacent(self, board: Board) -> None:
        assert board.adjacent(E2, 0, 1) == E3
        assert board.adjacent(A1, -1, 0) is None

    def test_ray_stops_on_first_occupied(self, board: Board) -> None:
        # a1 rook looking up: a2 holds its own pawn
        assert list(board.ray(A1, 0, 1, 8)) == [A2]

    def test_ray_stops_at_edge(self) -> None:
        empty = Board.empty()
        assert len(list(empty.ray(A1, 1, 1, 8))) == 7

    def test_ray_respects_step_limit(self) -> None:
        empty = Board.empty()
        assert list(empty.ray(E2, 0, 1, 2)) == [E3, E4]


class TestPlacement:
    def test_empty_board(self) -> None:
        empty = Board.empty()
        assert empty.pieces() == []
        with pytest.raises(ValueError):
            empty.king(Color.WHITE)

    def test_place_on_occupied_raises(self, board: Board) -> None:
        with pytest.raises(ValueError):
            board.place(E2, Color.WHITE, PieceType.QUEEN)

    def test_second_king_raises(self) -> None:
        b = place_pieces({"e1": "K", "e8": "k"})
        with pytest.raises(ValueError):
            b.place(A1, Color.WHITE, PieceType.KING)

    def test_has_moved_inferred_from_cell(self) -> None:
        b = place_pieces(
            {"e1": "K", "e8": "k", "e2": "P", "e5": "P", "a1": "R", "c1": "R"}
        )
        assert not b.piece_at(E2).has_moved
        assert b.piece_at(E5).has_moved
        assert not b.piece_at(A1).has_moved
        assert b.piece_at(C1).has_moved
        assert not b.king(Color.WHITE).has_moved

    def test_explicit_has_moved(self) -> None:
        b = Board.empty()
        piece = b.place(E1, Color.WHITE, PieceType.KING, has_moved=True)
        assert piece.has_moved
        assert piece.cell == E1


class TestAttackMap:
    def test_pawn_diagonals(self, board: Board) -> None:
        hitters = {(p.kind, p.cell) for p in board.hit_by(E3)}
        assert hitters == {(PieceType.PAWN, D2), (PieceType.PAWN, F2)}

    def test_knight_and_pawns_cover_c3(self, board: Board) -> None:
        hitters = {(p.kind, p.cell) for p in board.hit_by(C3)}
        assert hitters == {
            (PieceType.PAWN, B2),
            (PieceType.PAWN, D2),
            (PieceType.KNIGHT, B1),
        }

    def test_pawn_push_is_not_an_attack(self, board: Board) -> None:
        pawn = board.piece_at(E2)
        assert pawn not in board.hit_by(E3)
        assert E3 not in pawn.hitting

    def test_protected_own_piece_is_hit(self, board: Board) -> None:
        # the queen on d1 defends the e2 pawn
        assert board.piece_at(D1) in board.hit_by(E2)

    def test_hit_sets_agree(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        board.turn_start(Color.BLACK)
        for cell in range(64):
            for piece in board.hit_by(cell):
                assert cell in piece.hitting
        for piece in board.pieces():
            for cell in piece.hitting:
                assert piece in board.hit_by(cell)


class TestCopy:
    def test_copy_is_independent(self, board: Board) -> None:
        clone = board.copy()
        clone.turn_start(Color.WHITE)
        clone.move(E2, E4)
        assert board.piece_at(E2) is not None
        assert board.piece_at(E4) is None

    def test_copy_keeps_flags_and_en_passant(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        clone = board.copy()
        assert clone.en_passant == board.en_passant
        assert clone.en_passant_capture == E4
        assert clone.piece_at(E4).has_moved


class TestMove:
    def test_simple_move(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        pawn = board.piece_at(E4)
        assert board.piece_at(E2) is None
        assert pawn.cell == E4
        assert pawn.has_moved

    def test_double_push_sets_en_passant(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        assert board.en_passant == E3
        assert board.en_passant_capture == E4

    def test_single_push_clears_en_passant(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4)
        board.turn_start(Color.BLACK)
        board.move(D7, D6)
        assert board.en_passant is None
        assert board.en_passant_capture is None

    def test_capture_removes_piece(self) -> None:
        b = place_pieces({"e1": "K", "e8": "k", "d1": "Q", "d7": "r"})
        victim = b.piece_at(D7)
        b.turn_start(Color.WHITE)
        b.move(D1, D7)
        assert victim not in b.pieces()
        assert victim.cell is None
        assert not victim.hitting
        assert b.piece_at(D7).kind == PieceType.QUEEN

    def test_en_passant_removes_pawn(self) -> None:
        b = place_pieces({"e1": "K", "e8": "k", "e5": "P", "d7": "p"})
        b.turn_start(Color.BLACK)
        b.move(D7, D5)
        b.turn_start(Color.WHITE)
        b.move(E5, D6)
        assert b.piece_at(D5) is None
        assert b.piece_at(D6).color == Color.WHITE
        assert len(b.pieces(Color.BLACK)) == 1

    def test_kingside_castle_moves_rook(self) -> None:
        b = place_pieces({"e1": "K", "h1": "R", "e8": "k"})
        b.turn_start(Color.WHITE)
        b.move(E1, G1)
        assert b.piece_at(G1).kind == PieceType.KING
        assert b.piece_at(F1).kind == PieceType.ROOK
        assert b.piece_at(H1) is None
        assert b.piece_at(F1).has_moved

    def test_queenside_castle_moves_rook(self) -> None:
        b = place_pieces({"e1": "K", "a1": "R", "e8": "k"})
        b.turn_start(Color.WHITE)
        b.move(E1, C1)
        assert b.piece_at(C1).kind == PieceType.KING
        assert b.piece_at(D1).kind == PieceType.ROOK
        assert b.piece_at(A1) is None

    def test_promotion_default_is_queen(self) -> None:
        b = place_pieces({"e1": "K", "h6": "k", "a7": "P"})
        b.turn_start(Color.WHITE)
        assert b.is_promotable(A7, A8)
        b.move(A7, A8)
        assert b.piece_at(A8).kind == PieceType.QUEEN

    def test_promotion_choice(self) -> None:
        b = place_pieces({"e1": "K", "h6": "k", "a7": "P"})
        pawn = b.piece_at(A7)
        b.turn_start(Color.WHITE)
        b.move(A7, A8, PromoteOption.KNIGHT)
        knight = b.piece_at(A8)
        assert knight.kind == PieceType.KNIGHT
        assert knight.color == Color.WHITE
        assert knight.has_moved
        assert pawn not in b.pieces()
        assert knight in b.pieces()

    def test_promoted_piece_attacks_at_once(self) -> None:
        b = place_pieces({"e1": "K", "h6": "k", "a7": "P"})
        b.turn_start(Color.WHITE)
        b.move(A7, A8, PromoteOption.ROOK)
        assert b.piece_at(A8) in b.hit_by(E8)

    def test_invalid_promotion_rejected_before_mutation(self) -> None:
        b = place_pieces({"e1": "K", "h6": "k", "a7": "P"})
        b.turn_start(Color.WHITE)
        with pytest.raises(ValueError):
            b.move(A7, A8, 9)
        assert b.piece_at(A7).kind == PieceType.PAWN
        assert b.piece_at(A8) is None

    def test_promotion_option_ignored_without_promotion(self, board: Board) -> None:
        board.turn_start(Color.WHITE)
        board.move(E2, E4, 9)
        assert board.piece_at(E4).kind == PieceType.PAWN

    def test_move_from_empty_cell_raises(self, board: Board) -> None:
        with pytest.raises(ValueError):
            board.move(E4, E5)

    def test_not_promotable_elsewhere(self, board: Board) -> None:
        assert not board.is_promotable(E2, E4)
        assert not board.is_promotable(E4, E5)

    def test_black_promotes_on_first_rank(self) -> None:
        b = place_pieces({"e1": "K", "h8": "k", "a2": "p"})
        assert b.is_promotable(A2, A1)


class TestRepr:
    def test_ascii_diagram(self, board: Board) -> None:
        text = repr(board)
        lines = text.splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[-2] == "1 R N B Q K B N R"
        assert lines[-1] == "  a b c d e f g h"

    def test_single_king(self) -> None:
        b = place_pieces({"h8": "k"})
        assert b.piece_at(H8).char == "k"
