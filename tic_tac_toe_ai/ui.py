from abc import ABC, abstractmethod

from tic_tac_toe_ai.game import GameMode
from tic_tac_toe_ai.game_controller import GameController, GameSnapshot
from tic_tac_toe_ai.result import Draw, Win


def describe_status(snapshot: GameSnapshot) -> str:
    match snapshot.result:
        case Win(mark=mark):
            return f"{mark} wins!"
        case Draw():
            return "It's a draw!"

    if snapshot.ai_thinking:
        return "AI is thinking..."
    if snapshot.mode is GameMode.HUMAN_VS_AI:
        if snapshot.current_player == snapshot.ai_symbol:
            return f"AI turn ({snapshot.current_player})"
        return f"Your turn ({snapshot.current_player})"
    return f"Player {snapshot.current_player}'s turn"


class Ui(ABC):
    def __init__(self, controller: GameController) -> None:
        self._controller = controller
        self._running = False
        self._controller.add_board_updated_cb(self.on_board_updated)
        self._controller.add_on_error_cb(self.on_error)

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> None:
        self._running = True

    def _stop(self) -> None:
        self._running = False

    def _apply_move(self, row: int, col: int) -> bool:
        return self._controller.submit_move(row, col)

    def _new_game(self) -> None:
        self._controller.reset()

    def _toggle_mode(self) -> None:
        self._controller.toggle_mode()

    def on_board_updated(self) -> None:
        if not self._running:
            return
        snapshot = self._controller.snapshot()
        self._render_board(snapshot)
        if isinstance(snapshot.result, Win | Draw):
            self._show_end_message(describe_status(snapshot))

    def on_error(self, exception: Exception) -> None:
        if not self._running:
            return
        self._on_input_error(exception)

    @abstractmethod
    def _render_board(self, snapshot: GameSnapshot) -> None:
        pass

    @abstractmethod
    def _show_end_message(self, message: str) -> None:
        pass

    @abstractmethod
    def _on_input_error(self, exception: Exception) -> None:
        pass
