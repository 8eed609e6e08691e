import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from tic_tac_toe_ai.board import Cell, Mark, Position
from tic_tac_toe_ai.exception import InvalidMoveError
from tic_tac_toe_ai.game import Game, GameMode
from tic_tac_toe_ai.player_ai import AiPlayer, MinimaxAiPlayer
from tic_tac_toe_ai.result import GameResult

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    AWAITING_HUMAN_MOVE = auto()
    AI_THINKING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    board: tuple[tuple[Cell, ...], ...]
    current_player: Mark
    result: GameResult
    mode: GameMode
    state: ControllerState
    ai_symbol: Mark

    @property
    def ai_thinking(self) -> bool:
        return self.state is ControllerState.AI_THINKING


class GameController:
    """Sequences turns between the human and the AI on top of a `Game`.

    In Human-vs-AI mode the AI move is computed as soon as the human move is applied,
    then applied after `ai_delay` seconds from a timer thread. A zero delay applies it
    synchronously. Every transition happens under a single lock so that the delayed
    AI move and user input never interleave.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.HUMAN_VS_HUMAN,
        *,
        ai_player: AiPlayer | None = None,
        ai_delay: float = 0.0,
    ) -> None:
        if ai_delay < 0:
            raise ValueError("AI delay must not be negative.")
        self._game = Game(mode)
        self._ai_player = ai_player if ai_player is not None else MinimaxAiPlayer("O")
        self._ai_delay = ai_delay
        self._state = ControllerState.AWAITING_HUMAN_MOVE
        self._lock = threading.RLock()
        self._ai_timer: threading.Timer | None = None
        # Bumped on every reset so that a stale delayed AI move is dropped.
        self._generation = 0
        self._board_updated_cbs: list[Callable[[], None]] = []
        self._on_error_cbs: list[Callable[[Exception], None]] = []

    @property
    def game(self) -> Game:
        return self._game

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._game.mode

    def add_board_updated_cb(self, callback: Callable[[], None]) -> None:
        self._board_updated_cbs.append(callback)

    def add_on_error_cb(self, callback: Callable[[Exception], None]) -> None:
        self._on_error_cbs.append(callback)

    def start(self) -> None:
        self._notify_board_updated()

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=self._game.board.rows,
                current_player=self._game.current_player,
                result=self._game.result,
                mode=self._game.mode,
                state=self._state,
                ai_symbol=self._ai_player.symbol,
            )

    def submit_move(self, row: int, col: int) -> bool:
        """Apply a human move. Returns False, and notifies the error callbacks, if it is rejected."""
        with self._lock:
            match self._state:
                case ControllerState.AI_THINKING:
                    return self._reject(InvalidMoveError("AI is thinking."))
                case ControllerState.GAME_OVER:
                    return self._reject(InvalidMoveError("Game over."))

            try:
                self._game.apply_move((row, col))
            except InvalidMoveError as e:
                return self._reject(e)

            self._advance()
            return True

    def reset(self, mode: GameMode | None = None) -> None:
        with self._lock:
            self._cancel_pending_ai_move()
            self._game.reset(mode)
            self._state = ControllerState.AWAITING_HUMAN_MOVE
            logger.info("New game (%s)", self._game.mode.name)
            self._notify_board_updated()

    def set_mode(self, mode: GameMode) -> None:
        self.reset(mode)

    def toggle_mode(self) -> None:
        with self._lock:
            self.set_mode(self._game.mode.toggled())

    def close(self) -> None:
        with self._lock:
            self._cancel_pending_ai_move()

    def _advance(self) -> None:
        if self._game.is_over:
            self._state = ControllerState.GAME_OVER
            self._notify_board_updated()
            return

        if self._game.mode is GameMode.HUMAN_VS_AI and self._game.current_player == self._ai_player.symbol:
            self._start_ai_turn()
            return

        self._state = ControllerState.AWAITING_HUMAN_MOVE
        self._notify_board_updated()

    def _start_ai_turn(self) -> None:
        self._state = ControllerState.AI_THINKING
        move = self._ai_player.find_move(self._game.board)
        self._notify_board_updated()

        if self._ai_delay == 0:
            self._apply_ai_move(move, self._generation)
            return

        self._ai_timer = threading.Timer(self._ai_delay, self._apply_ai_move, args=(move, self._generation))
        self._ai_timer.daemon = True
        self._ai_timer.start()

    def _apply_ai_move(self, move: Position, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state is not ControllerState.AI_THINKING:
                logger.debug("Dropping stale AI move %s", move)
                return
            self._ai_timer = None
            # The move was computed on this exact board, so the engine cannot reject it.
            self._game.apply_move(move)
            self._advance()

    def _cancel_pending_ai_move(self) -> None:
        self._generation += 1
        if self._ai_timer is not None:
            self._ai_timer.cancel()
            self._ai_timer = None

    def _reject(self, exception: InvalidMoveError) -> bool:
        logger.info("Move rejected: %s", exception)
        self._notify_on_error(exception)
        return False

    def _notify_board_updated(self) -> None:
        for callback in list(self._board_updated_cbs):
            callback()

    def _notify_on_error(self, exception: Exception) -> None:
        for callback in list(self._on_error_cbs):
            callback(exception)
