import logging
from enum import Enum

from tic_tac_toe_ai.board import Board, Mark, Move, Position, opponent
from tic_tac_toe_ai.exception import InvalidMoveError
from tic_tac_toe_ai.result import GameResult, check_result, is_terminal

logger = logging.getLogger(__name__)


class GameMode(Enum):
    HUMAN_VS_HUMAN = "human"
    HUMAN_VS_AI = "ai"

    def toggled(self) -> "GameMode":
        return GameMode.HUMAN_VS_AI if self is GameMode.HUMAN_VS_HUMAN else GameMode.HUMAN_VS_HUMAN


class Game:
    """A single tic-tac-toe session: board, mover, mode and move history.

    The board is only ever mutated through `apply_move`. The result is not stored;
    it is recomputed from the board every time it is read.
    """

    def __init__(self, mode: GameMode = GameMode.HUMAN_VS_HUMAN) -> None:
        self._board = Board()
        self._current_player: Mark = "X"
        self._mode = mode
        self._moves: list[Move] = []

    @classmethod
    def from_board(cls, board: Board, mode: GameMode = GameMode.HUMAN_VS_HUMAN) -> "Game":
        game = cls(mode)
        game._board = board.clone()
        game._current_player = board.next_mark()
        return game

    @property
    def board(self) -> Board:
        """A copy of the board; the session's own board only changes through `apply_move`."""
        return self._board.clone()

    @property
    def current_player(self) -> Mark:
        return self._current_player

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def moves(self) -> tuple[Move, ...]:
        return tuple(self._moves)

    @property
    def result(self) -> GameResult:
        return check_result(self._board)

    @property
    def is_over(self) -> bool:
        return is_terminal(self.result)

    def apply_move(self, position: Position) -> GameResult:
        if self.is_over:
            raise InvalidMoveError("Game over.")

        row, col = position
        self._board.place(position, self._current_player)
        self._moves.append(Move(self._current_player, row, col))
        logger.debug("Player %s played (%d, %d)", self._current_player, row, col)
        self._current_player = opponent(self._current_player)

        result = self.result
        if is_terminal(result):
            logger.info("Game finished: %s", result)
        return result

    def reset(self, mode: GameMode | None = None) -> None:
        if mode is not None:
            self._mode = mode
        self._board = Board()
        self._current_player = "X"
        self._moves.clear()
