import logging
from abc import ABC, abstractmethod
from typing import Final

from tic_tac_toe_ai.board import Board, Grid, Mark, Position, find_winning_line, get_available_positions, opponent
from tic_tac_toe_ai.exception import InvalidAiInvocationError, LogicError

logger = logging.getLogger(__name__)

WIN_SCORE: Final = 10
SCORE_BOUND: Final = 100


class AiPlayer(ABC):
    def __init__(self, symbol: Mark) -> None:
        self._symbol = symbol

    @property
    def symbol(self) -> Mark:
        return self._symbol

    def find_move(self, board: Board) -> Position:
        if board.winning_line() is not None or board.is_full():
            msg = f"Player {self._symbol} asked to move on a finished board:\n{board}"
            raise InvalidAiInvocationError(msg)
        return self._find_move(board)

    @abstractmethod
    def _find_move(self, board: Board) -> Position:
        pass


class MinimaxAiPlayer(AiPlayer):
    """Perfect-play opponent based on an exhaustive minimax search.

    A win scores ``10 - depth`` and a loss ``depth - 10``, so quicker wins and slower
    losses are preferred. Candidate moves are scanned in row-major order and the first
    one with the strictly greatest score is kept, which makes the choice deterministic.

    Alpha-beta pruning only skips branches that cannot change the choice: the root
    passes its best score so far as the lower bound, so any move that would beat it
    is still scored exactly.
    """

    def __init__(self, symbol: Mark) -> None:
        super().__init__(symbol)
        self._positions_evaluated = 0

    @property
    def positions_evaluated(self) -> int:
        return self._positions_evaluated

    def _find_move(self, board: Board) -> Position:
        self._positions_evaluated = 0
        grid = board.grid()

        best_score = -SCORE_BOUND
        best_move: Position | None = None
        for row, col in get_available_positions(grid):
            grid[row][col] = self._symbol
            score = self._minimax(grid, opponent(self._symbol), 1, best_score, SCORE_BOUND)
            grid[row][col] = None

            if best_move is None or score > best_score:
                best_score = score
                best_move = (row, col)

        if best_move is None:
            msg = f"No moves available for player {self._symbol}, but game not over."
            raise LogicError(msg)
        logger.debug(
            "Player %s evaluated %d positions, best move %s (score %d)",
            self._symbol,
            self._positions_evaluated,
            best_move,
            best_score,
        )
        return best_move

    def _minimax(self, grid: Grid, player: Mark, depth: int, alpha: int, beta: int) -> int:
        self._positions_evaluated += 1

        line = find_winning_line(grid)
        if line is not None:
            row, col = line[0]
            return WIN_SCORE - depth if grid[row][col] == self._symbol else depth - WIN_SCORE

        available = get_available_positions(grid)
        if not available:
            return 0

        is_maximizing = player == self._symbol
        best_score = -SCORE_BOUND if is_maximizing else SCORE_BOUND

        for row, col in available:
            grid[row][col] = player
            score = self._minimax(grid, opponent(player), depth + 1, alpha, beta)
            grid[row][col] = None

            if is_maximizing:
                best_score = max(best_score, score)
                alpha = max(alpha, best_score)
            else:
                best_score = min(best_score, score)
                beta = min(beta, best_score)
            if alpha >= beta:
                break

        return best_score


def select_move(board: Board, ai_mark: Mark) -> Position:
    """Return the optimal move for `ai_mark` on `board`, which must not be finished."""
    return MinimaxAiPlayer(ai_mark).find_move(board)
