"""Tests for GameSessionController: the click/opponent state machine."""

from __future__ import annotations

import pytest

from chessmate.core.board import STARTING_FEN, Board
from chessmate.core.enums import Color, PieceKind
from chessmate.core.move import Move, PlainMove, Promotion
from chessmate.core.piece import Piece
from chessmate.core.result import GameResult, IllegalMove
from chessmate.core.rules import IRulesEngine, Rules
from chessmate.core.types import Position
from chessmate.game.config import SessionConfig
from chessmate.game.controller import GameSessionController, SessionView
from chessmate.game.interfaces import (
    AwaitingFirstClick,
    AwaitingOpponentMove,
    AwaitingPromotionChoice,
    AwaitingSecondClick,
    EngineContractError,
    GameOver,
    NewGameRequested,
    OpponentMoveReady,
    PromotionPieceChosen,
    SessionPhase,
    SquareClicked,
)
from chessmate.game.scheduler import DeferredScheduler

P = Position.parse

CASTLING_FEN = "4k3/8/8/8/8/8/8/4K2R w K - 0 1"
PROMOTION_FEN = "1k6/P7/8/8/8/8/8/K7 w - - 0 1"
BACK_RANK_MATE_FEN = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
CAPTURE_MATE_FEN = "4r2k/6pp/8/8/8/8/8/4R1K1 w - - 0 1"
STALEMATE_FEN = "k7/8/1K6/8/8/8/8/2Q5 w - - 0 1"
PAWN_TRADE_FEN = "4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1"


class _ScriptedSource:
    """Plays the given moves in order and remembers every board it saw."""

    def __init__(self, *moves: Move) -> None:
        self._moves = list(moves)
        self.boards: list[Board] = []

    def __call__(self, board: Board) -> Move:
        self.boards.append(board)
        return self._moves.pop(0)


class _RejectingRules(Rules):
    """Accepts every legal move, then refuses to apply it."""

    def apply(self, board: Board, move: Move) -> GameResult:
        return IllegalMove(move)


def _make(
    fen: str | None = None,
    source: _ScriptedSource | None = None,
    human: Color = Color.WHITE,
    rules: IRulesEngine | None = None,
) -> tuple[GameSessionController, DeferredScheduler]:
    scheduler = DeferredScheduler()
    config = SessionConfig(
        opponent_move_source=source if source is not None else _ScriptedSource(),
        starting_board=Board.from_fen(fen) if fen else Board.default(),
        human_color=human,
    )
    return GameSessionController(config, scheduler, rules), scheduler


def _click(ctrl: GameSessionController, *names: str) -> None:
    for name in names:
        ctrl.handle(SquareClicked(P(name)))


def _move(uci: str) -> PlainMove:
    return PlainMove(P(uci[:2]), P(uci[2:]))


class TestStart:
    def test_human_white_waits_for_first_click(self) -> None:
        ctrl, scheduler = _make()
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == STARTING_FEN
        assert ctrl.expected_mover == Color.WHITE
        assert scheduler.pending == 0

    def test_human_black_lets_opponent_open(self) -> None:
        ctrl, scheduler = _make(human=Color.BLACK)
        assert ctrl.state == AwaitingOpponentMove(1)
        assert ctrl.expected_mover == Color.WHITE
        assert scheduler.last_request() == (Board.default(), 1)


class TestSelection:
    def test_click_on_empty_square_is_ignored(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e4")
        assert ctrl.state == AwaitingFirstClick()

    def test_click_on_opponent_piece_is_ignored(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e7")
        assert ctrl.state == AwaitingFirstClick()

    def test_click_on_own_piece_selects(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2")
        assert ctrl.state == AwaitingSecondClick(P("e2"))
        assert ctrl.view().selected == P("e2")

    def test_second_click_on_same_square_deselects(self) -> None:
        ctrl, scheduler = _make()
        _click(ctrl, "e2", "e2")
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == STARTING_FEN
        assert scheduler.pending == 0

    def test_click_on_other_own_piece_reselects(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "g1")
        assert ctrl.state == AwaitingSecondClick(P("g1"))


class TestHumanMove:
    def test_e2e4_requests_opponent_move_with_new_board(self) -> None:
        ctrl, scheduler = _make()
        _click(ctrl, "e2", "e4")

        assert ctrl.state == AwaitingOpponentMove(1)
        assert ctrl.phase == SessionPhase.AWAITING_OPPONENT_MOVE
        assert ctrl.expected_mover == Color.BLACK
        request = scheduler.last_request()
        assert request is not None
        board, request_id = request
        assert request_id == 1
        assert board.side_to_move == Color.BLACK
        pawn = board.piece_at(P("e4"))
        assert pawn is not None and pawn.kind == PieceKind.PAWN
        assert board.piece_at(P("e2")) is None
        assert ctrl.captured.white == () and ctrl.captured.black == ()

    def test_illegal_move_is_rejected_without_request(self) -> None:
        ctrl, scheduler = _make()
        _click(ctrl, "e2", "e5")
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == STARTING_FEN
        assert scheduler.pending == 0

    def test_opponent_reply_is_applied(self) -> None:
        source = _ScriptedSource(_move("e7e5"))
        ctrl, scheduler = _make(source=source)
        _click(ctrl, "e2", "e4")

        assert scheduler.run_pending() == 1

        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.side_to_move == Color.WHITE
        assert ctrl.board.piece_at(P("e5")) is not None
        assert source.boards[0].piece_at(P("e4")) is not None

    def test_kingside_castle_by_clicks(self) -> None:
        ctrl, _ = _make(CASTLING_FEN)
        _click(ctrl, "e1", "g1")

        king = ctrl.board.piece_at(P("g1"))
        rook = ctrl.board.piece_at(P("f1"))
        assert king is not None and king.kind == PieceKind.KING
        assert rook is not None and rook.kind == PieceKind.ROOK
        assert ctrl.board.piece_at(P("h1")) is None
        assert isinstance(ctrl.state, AwaitingOpponentMove)


class TestPromotion:
    def test_last_rank_click_waits_for_choice(self) -> None:
        ctrl, scheduler = _make(PROMOTION_FEN)
        _click(ctrl, "a7", "a8")

        assert ctrl.state == AwaitingPromotionChoice(P("a7"), P("a8"))
        assert ctrl.view().promotion == (P("a7"), P("a8"))
        assert ctrl.board.fen == PROMOTION_FEN
        assert scheduler.pending == 0

    def test_choice_applies_promotion(self) -> None:
        ctrl, scheduler = _make(PROMOTION_FEN)
        _click(ctrl, "a7", "a8")
        ctrl.handle(PromotionPieceChosen(PieceKind.QUEEN))

        queen = ctrl.board.piece_at(P("a8"))
        assert queen == Piece(PieceKind.QUEEN, Color.WHITE, P("a8"))
        assert ctrl.board.piece_at(P("a7")) is None
        assert isinstance(ctrl.state, AwaitingOpponentMove)
        assert scheduler.pending == 1

    def test_clicks_ignored_while_choosing(self) -> None:
        ctrl, _ = _make(PROMOTION_FEN)
        _click(ctrl, "a7", "a8", "a1", "a7")
        assert ctrl.state == AwaitingPromotionChoice(P("a7"), P("a8"))

    def test_invalid_kind_ignored(self) -> None:
        ctrl, _ = _make(PROMOTION_FEN)
        _click(ctrl, "a7", "a8")
        ctrl.handle(PromotionPieceChosen(PieceKind.KING))
        ctrl.handle(PromotionPieceChosen(PieceKind.PAWN))
        assert ctrl.state == AwaitingPromotionChoice(P("a7"), P("a8"))

    def test_choice_without_pending_promotion_ignored(self) -> None:
        ctrl, _ = _make(PROMOTION_FEN)
        ctrl.handle(PromotionPieceChosen(PieceKind.QUEEN))
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == PROMOTION_FEN

    def test_illegal_promotion_target_rejected_after_choice(self) -> None:
        ctrl, scheduler = _make(PROMOTION_FEN)
        _click(ctrl, "a7", "c8")
        assert ctrl.state == AwaitingPromotionChoice(P("a7"), P("c8"))

        ctrl.handle(PromotionPieceChosen(PieceKind.ROOK))

        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == PROMOTION_FEN
        assert scheduler.pending == 0


class TestCaptures:
    def test_human_capture_recorded_under_captured_color(self) -> None:
        ctrl, _ = _make("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        _click(ctrl, "e4", "d5")

        assert ctrl.captured.black == (Piece(PieceKind.PAWN, Color.BLACK, P("d5")),)
        assert ctrl.captured.white == ()

    def test_opponent_capture_recorded_under_captured_color(self) -> None:
        source = _ScriptedSource(_move("c6d4"))
        ctrl, scheduler = _make("4k3/8/2n5/8/8/8/3P4/4K3 w - - 0 1", source)
        _click(ctrl, "d2", "d4")
        scheduler.run_pending()

        assert ctrl.captured.white == (Piece(PieceKind.PAWN, Color.WHITE, P("d4")),)
        assert ctrl.captured.black == ()
        knight = ctrl.board.piece_at(P("d4"))
        assert knight is not None and knight.color == Color.BLACK

    def test_capture_not_recorded_when_rules_refuse_apply(self) -> None:
        ctrl, scheduler = _make(PAWN_TRADE_FEN, rules=_RejectingRules())
        _click(ctrl, "e4")

        with pytest.raises(EngineContractError):
            _click(ctrl, "d5")

        assert ctrl.board.fen == PAWN_TRADE_FEN
        assert ctrl.captured.white == () and ctrl.captured.black == ()
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.expected_mover == ctrl.board.side_to_move
        assert scheduler.pending == 0

    def test_opponent_capture_not_recorded_when_rules_refuse_apply(self) -> None:
        source = _ScriptedSource(_move("d5e4"))
        ctrl, scheduler = _make(
            PAWN_TRADE_FEN.replace(" w ", " b "),
            source,
            rules=_RejectingRules(),
        )

        with pytest.raises(EngineContractError):
            scheduler.run_pending()

        assert ctrl.captured.white == ()
        assert ctrl.state == AwaitingOpponentMove(1)
        assert ctrl.expected_mover == ctrl.board.side_to_move == Color.BLACK

    def test_quiet_moves_record_nothing(self) -> None:
        source = _ScriptedSource(_move("e7e5"))
        ctrl, scheduler = _make(source=source)
        _click(ctrl, "e2", "e4")
        scheduler.run_pending()
        assert ctrl.captured.white == () and ctrl.captured.black == ()


class TestOpponentReply:
    def test_mismatched_request_id_is_discarded(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4")
        board = ctrl.board

        ctrl.handle(OpponentMoveReady(_move("e7e5"), 99))

        assert ctrl.state == AwaitingOpponentMove(1)
        assert ctrl.board == board

    def test_duplicate_reply_is_discarded(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4")
        reply = OpponentMoveReady(_move("e7e5"), 1)

        ctrl.handle(reply)
        board = ctrl.board
        ctrl.handle(reply)

        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board == board

    def test_unrequested_reply_is_discarded(self) -> None:
        ctrl, _ = _make()
        ctrl.handle(OpponentMoveReady(_move("e7e5"), 1))
        assert ctrl.board.fen == STARTING_FEN

    def test_illegal_reply_raises_and_keeps_board(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4")
        board = ctrl.board

        with pytest.raises(EngineContractError):
            ctrl.handle(OpponentMoveReady(_move("d7d4"), 1))

        assert ctrl.board == board
        assert ctrl.captured.white == () and ctrl.captured.black == ()

    def test_illegal_reply_keeps_waiting_for_opponent(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4")

        with pytest.raises(EngineContractError):
            ctrl.handle(OpponentMoveReady(_move("d7d4"), 1))

        assert ctrl.state == AwaitingOpponentMove(1)
        assert ctrl.expected_mover == ctrl.board.side_to_move == Color.BLACK

        ctrl.handle(OpponentMoveReady(_move("e7e5"), 1))
        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.expected_mover == ctrl.board.side_to_move == Color.WHITE

    def test_reply_moving_human_piece_raises(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4")
        with pytest.raises(EngineContractError):
            ctrl.handle(OpponentMoveReady(_move("g1f3"), 1))

    def test_clicks_ignored_while_waiting(self) -> None:
        ctrl, _ = _make()
        _click(ctrl, "e2", "e4", "d2", "d4")
        assert ctrl.state == AwaitingOpponentMove(1)

    def test_new_game_ignored_while_playing(self) -> None:
        ctrl, scheduler = _make()
        _click(ctrl, "e2", "e4")
        ctrl.handle(NewGameRequested())
        assert ctrl.state == AwaitingOpponentMove(1)
        assert scheduler.pending == 1


class TestGameOver:
    def test_human_checkmate(self) -> None:
        ctrl, scheduler = _make(BACK_RANK_MATE_FEN)
        messages: list[str] = []
        ctrl.events.on_game_over.append(messages.append)

        _click(ctrl, "a1", "a8")

        assert ctrl.state == GameOver("White wins!")
        assert ctrl.is_game_over
        assert ctrl.expected_mover is None
        assert messages == ["White wins!"]
        assert scheduler.pending == 0
        rook = ctrl.board.piece_at(P("a8"))
        assert rook is not None and rook.kind == PieceKind.ROOK

    def test_opponent_checkmate(self) -> None:
        source = _ScriptedSource(_move("e7e5"), _move("d8h4"))
        ctrl, scheduler = _make(source=source)

        _click(ctrl, "f2", "f3")
        scheduler.run_pending()
        _click(ctrl, "g2", "g4")
        scheduler.run_pending()

        assert ctrl.state == GameOver("Black wins!")
        assert ctrl.view().message == "Black wins!"
        assert ctrl.board.piece_at(P("h4")) is not None

    def test_stalemate(self) -> None:
        ctrl, _ = _make(STALEMATE_FEN)
        _click(ctrl, "c1", "c7")
        assert ctrl.state == GameOver("Stalemate!")

    def test_only_new_game_is_accepted(self) -> None:
        ctrl, _ = _make(BACK_RANK_MATE_FEN)
        _click(ctrl, "a1", "a8")
        board = ctrl.board

        _click(ctrl, "g1", "f1")
        ctrl.handle(PromotionPieceChosen(PieceKind.QUEEN))
        ctrl.handle(OpponentMoveReady(_move("g8h8"), 1))

        assert ctrl.state == GameOver("White wins!")
        assert ctrl.board == board

    def test_new_game_resets_board_and_captures(self) -> None:
        ctrl, _ = _make(CAPTURE_MATE_FEN)
        _click(ctrl, "e1", "e8")
        assert ctrl.is_game_over
        assert ctrl.captured.black == (Piece(PieceKind.ROOK, Color.BLACK, P("e8")),)

        ctrl.handle(NewGameRequested())

        assert ctrl.state == AwaitingFirstClick()
        assert ctrl.board.fen == CAPTURE_MATE_FEN
        assert ctrl.captured.white == () and ctrl.captured.black == ()

    def test_new_game_with_opponent_to_move_discards_old_replies(self) -> None:
        source = _ScriptedSource(_move("a1a8"), _move("a1a8"))
        ctrl, scheduler = _make(BACK_RANK_MATE_FEN, source, human=Color.BLACK)
        scheduler.run_pending()
        assert ctrl.state == GameOver("White wins!")

        ctrl.handle(NewGameRequested())
        assert ctrl.state == AwaitingOpponentMove(2)
        assert scheduler.pending == 1

        ctrl.handle(OpponentMoveReady(_move("a1a8"), 1))
        assert ctrl.state == AwaitingOpponentMove(2)

        scheduler.run_pending()
        assert ctrl.state == GameOver("White wins!")


class TestViewEvents:
    def test_view_emitted_on_change_only(self) -> None:
        ctrl, _ = _make()
        views: list[SessionView] = []
        ctrl.events.on_view_changed.append(views.append)

        _click(ctrl, "e4")
        assert views == []

        _click(ctrl, "e2")
        assert len(views) == 1
        assert views[0].phase == SessionPhase.AWAITING_SECOND_CLICK
        assert views[0].selected == P("e2")

        _click(ctrl, "e4")
        assert len(views) == 2
        assert views[-1].phase == SessionPhase.AWAITING_OPPONENT_MOVE
        assert views[-1].side_to_move == Color.BLACK
        assert views[-1].selected is None

    def test_game_over_view_carries_message(self) -> None:
        ctrl, _ = _make(BACK_RANK_MATE_FEN)
        views: list[SessionView] = []
        ctrl.events.on_view_changed.append(views.append)

        _click(ctrl, "a1", "a8")

        assert views[-1].is_game_over
        assert views[-1].message == "White wins!"

    def test_unknown_event_type(self) -> None:
        ctrl, _ = _make()
        with pytest.raises(TypeError):
            ctrl.handle("e2e4")  # type: ignore[arg-type]
