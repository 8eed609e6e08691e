# ruff: noqa: T201

from typing import Final

from tic_tac_toe_ai.board import BOARD_SIZE
from tic_tac_toe_ai.game_controller import ControllerState, GameController, GameSnapshot
from tic_tac_toe_ai.ui import Ui, describe_status


class TerminalUi(Ui):
    RESET_COMMANDS: Final = frozenset({"r", "reset"})
    MODE_COMMANDS: Final = frozenset({"m", "mode"})
    EXIT_COMMANDS: Final = frozenset({"q", "exit"})

    def __init__(self, controller: GameController) -> None:
        super().__init__(controller)

    def run(self) -> None:
        super().run()
        self._print_help()
        while self._running:
            self._get_input()
        print("Terminal UI stopped", flush=True)

    def _print_help(self) -> None:
        max_move = BOARD_SIZE * BOARD_SIZE
        print(f"Moves: 1-{max_move}. Commands: r (new game), m (switch mode), exit.", flush=True)

    def _get_input(self) -> None:
        try:
            input_str = input()
        except (KeyboardInterrupt, EOFError):
            self._stop()
            return
        self.handle_command(input_str)

    def handle_command(self, input_str: str) -> None:
        command = input_str.strip().lower()

        if command in self.EXIT_COMMANDS:
            self._stop()
            return
        if command in self.RESET_COMMANDS:
            self._new_game()
            return
        if command in self.MODE_COMMANDS:
            self._toggle_mode()
            return

        max_move = BOARD_SIZE * BOARD_SIZE
        try:
            board_position = int(command)
        except ValueError:
            self._on_input_error(ValueError("Not an integer"))
            return

        if not (1 <= board_position <= max_move):
            self._on_input_error(ValueError(f"Not between 1 and {max_move}"))
            return

        row, col = divmod(board_position - 1, BOARD_SIZE)
        self._apply_move(row, col)

    def _render_board(self, snapshot: GameSnapshot) -> None:
        board = snapshot.board

        def _cell_value(index: int) -> str:
            row, col = divmod(index, BOARD_SIZE)
            value = board[row][col]
            return value if value is not None else str(index + 1)

        rows = []
        for r in range(BOARD_SIZE):
            start = r * BOARD_SIZE
            row = " | ".join(_cell_value(start + i) for i in range(BOARD_SIZE))
            rows.append(f" {row} ")

        separator = "\n-----------\n"
        output = separator.join(rows)
        print(f"\n{output}\n", flush=True)
        if snapshot.state is not ControllerState.GAME_OVER:
            print(describe_status(snapshot), flush=True)

    def _show_end_message(self, message: str) -> None:
        print(f"{message} Type r to play again.", flush=True)

    def _on_input_error(self, exception: Exception) -> None:
        if not self._running:
            return
        print(str(exception), flush=True)
