"""Fixed-depth negamax search with alpha-beta pruning."""

from __future__ import annotations

from time import sleep

import chess

from chessmate.core.board import Board
from chessmate.engine.search import CancelCheck, SearchLimits, SearchResult

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000
_YIELD_INTERVAL_NODES = 4096

_PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}


def _never_cancelled() -> bool:
    return False


class MinimaxSearch:
    """Negamax searcher scoring positions by material and piece placement.

    With ``prefer_worst`` the root picks the move that scores lowest for
    the side to move, which gives a deliberately weak but still legal
    opponent.
    """

    __slots__ = ("_cancel_check", "_nodes", "_last_yield_nodes")

    def __init__(self) -> None:
        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
        *,
        prefer_worst: bool = False,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled

        native = board.chess_board()
        root_moves = self._order_moves(native, list(native.legal_moves))
        if not root_moves:
            if native.is_check():
                return SearchResult(None, -_MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        depth = limits.max_depth
        best_move: chess.Move | None = None
        best_score = _INF_SCORE if prefer_worst else -_INF_SCORE
        alpha = -_INF_SCORE

        for move in root_moves:
            if best_move is not None and self._should_stop():
                break

            native.push(move)
            if prefer_worst:
                # Exact scores are needed to find the minimum.
                score = -self._negamax(native, depth - 1, -_INF_SCORE, _INF_SCORE, 1)
            else:
                score = -self._negamax(native, depth - 1, -_INF_SCORE, -alpha, 1)
            native.pop()

            if prefer_worst:
                if score < best_score:
                    best_score, best_move = score, move
            else:
                if score > best_score:
                    best_score, best_move = score, move
                alpha = max(alpha, score)

        return SearchResult(
            board.from_engine_move(best_move) if best_move is not None else None,
            best_score,
            depth,
            self._nodes,
        )

    # ── Tree search ──────────────────────────────────────────────────────

    def _negamax(
        self,
        board: chess.Board,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._nodes += 1

        legal = list(board.legal_moves)
        if not legal:
            if board.is_check():
                # Prefer the shortest mate.
                return -_MATE_SCORE + ply
            return 0

        if depth <= 0 or self._should_stop():
            return self._static_eval(board)

        best_score = -_INF_SCORE
        for move in self._order_moves(board, legal):
            board.push(move)
            score = -self._negamax(board, depth - 1, -beta, -alpha, ply + 1)
            board.pop()

            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best_score

    def _should_stop(self) -> bool:
        if self._nodes - self._last_yield_nodes >= _YIELD_INTERVAL_NODES:
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        return self._cancel_check()

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_moves(
        self, board: chess.Board, moves: list[chess.Move]
    ) -> list[chess.Move]:
        return sorted(
            moves,
            key=lambda move: self._move_order_score(board, move),
            reverse=True,
        )

    def _move_order_score(self, board: chess.Board, move: chess.Move) -> int:
        score = 0
        if move.promotion is not None:
            score += 20_000 + _PIECE_VALUES[move.promotion]
        if board.is_capture(move):
            victim = board.piece_type_at(move.to_square) or chess.PAWN
            attacker = board.piece_type_at(move.from_square) or chess.PAWN
            score += 10_000 + 10 * _PIECE_VALUES[victim] - _PIECE_VALUES[attacker]
        if board.is_castling(move):
            score += 120
        return score

    # ── Evaluation ───────────────────────────────────────────────────────

    def _static_eval(self, board: chess.Board) -> int:
        """Material plus placement, from the side to move's point of view."""
        white_score = 0
        black_score = 0

        for sq, piece in board.piece_map().items():
            val = _PIECE_VALUES[piece.piece_type]
            val += self._piece_square_bonus(piece.piece_type, piece.color, sq)
            if piece.color == chess.WHITE:
                white_score += val
            else:
                black_score += val

        score = white_score - black_score
        if board.turn == chess.WHITE:
            return score
        return -score

    def _piece_square_bonus(
        self,
        piece_type: chess.PieceType,
        color: chess.Color,
        sq: chess.Square,
    ) -> int:
        file_idx = chess.square_file(sq)
        rank_idx = chess.square_rank(sq)
        if color == chess.BLACK:
            rank_idx = 7 - rank_idx

        center_dist = abs(file_idx - 3) + abs(rank_idx - 3)

        if piece_type == chess.PAWN:
            return rank_idx * 12 - abs(file_idx - 3) * 2
        if piece_type == chess.KNIGHT:
            return 28 - center_dist * 8
        if piece_type == chess.BISHOP:
            return 22 - center_dist * 5 + rank_idx * 2
        if piece_type == chess.ROOK:
            return 10 + rank_idx * 3 - abs(file_idx - 3)
        if piece_type == chess.QUEEN:
            return 6 - center_dist * 2

        # King: stay home.
        if rank_idx <= 1:
            return 18 - abs(file_idx - 4) * 2
        return -rank_idx * 8
