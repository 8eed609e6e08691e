from typing import Final

import pygame

from tic_tac_toe_ai.board import BOARD_SIZE, Position
from tic_tac_toe_ai.game_controller import ControllerState, GameController, GameSnapshot
from tic_tac_toe_ai.result import Win
from tic_tac_toe_ai.ui import Ui, describe_status


class PygameUi(Ui):
    TITLE: Final = "Tic-Tac-Toe (Pygame)"
    WINDOW_SIZE: Final = 480
    STATUS_HEIGHT: Final = 64
    CELL_SIZE: Final = WINDOW_SIZE // BOARD_SIZE
    LINE_WIDTH: Final = 4
    WIN_LINE_WIDTH: Final = 10

    BG_COLOR: Final = (0, 0, 0)
    LINE_COLOR: Final = (127, 127, 127)
    X_COLOR: Final = (191, 63, 63)
    O_COLOR: Final = (63, 63, 191)
    WIN_LINE_COLOR: Final = (223, 223, 223)
    TEXT_COLOR: Final = (255, 255, 255)

    def __init__(self, controller: GameController) -> None:
        super().__init__(controller)
        self._snapshot = self._controller.snapshot()
        self._end_message = ""

    def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((self.WINDOW_SIZE, self.WINDOW_SIZE + self.STATUS_HEIGHT))
        pygame.display.set_caption(self.TITLE)

        self._font = pygame.font.SysFont(None, 96)
        self._small_font = pygame.font.SysFont(None, 36)
        self._hint_font = pygame.font.SysFont(None, 22)

        super().run()
        self._main_loop()

    def _main_loop(self) -> None:
        clock = pygame.time.Clock()
        while self._running:
            clock.tick(30)
            self._handle_events()
            self._render()
        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            match event.type:
                case pygame.QUIT:
                    self._stop()
                case pygame.KEYDOWN:
                    self._on_key(event.key)
                case pygame.MOUSEBUTTONDOWN:
                    if self._end_message:
                        self._new_game()
                    else:
                        self._on_click(event.pos)

    def _on_key(self, key: int) -> None:
        match key:
            case pygame.K_r:
                self._new_game()
            case pygame.K_m:
                self._toggle_mode()
            case pygame.K_ESCAPE:
                self._stop()

    def _on_click(self, pos: tuple[int, int]) -> None:
        x, y = pos
        col = x // self.CELL_SIZE
        row = y // self.CELL_SIZE
        if not (0 <= row < BOARD_SIZE) or not (0 <= col < BOARD_SIZE):
            return
        self._apply_move(row, col)

    def _render_board(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        if snapshot.state is not ControllerState.GAME_OVER:
            self._end_message = ""

    def _show_end_message(self, message: str) -> None:
        self._end_message = message

    def _on_input_error(self, _exception: Exception) -> None:
        pass

    def _render(self) -> None:
        pygame.display.set_caption(f"{self.TITLE} - {self._snapshot.mode.name.replace('_', ' ').title()}")
        self._screen.fill(self.BG_COLOR)
        self._draw_grid()
        self._draw_marks()
        self._draw_winning_line()
        self._draw_status()
        pygame.display.flip()

    def _draw_grid(self) -> None:
        for i in range(1, BOARD_SIZE):
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (0, i * self.CELL_SIZE),
                (self.WINDOW_SIZE, i * self.CELL_SIZE),
                self.LINE_WIDTH,
            )
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (i * self.CELL_SIZE, 0),
                (i * self.CELL_SIZE, self.WINDOW_SIZE),
                self.LINE_WIDTH,
            )
        pygame.draw.line(
            self._screen,
            self.LINE_COLOR,
            (0, self.WINDOW_SIZE),
            (self.WINDOW_SIZE, self.WINDOW_SIZE),
            self.LINE_WIDTH,
        )

    def _draw_marks(self) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                value = self._snapshot.board[row][col]
                if value is None:
                    continue
                text = self._font.render(value, True, self.X_COLOR if value == "X" else self.O_COLOR)  # noqa: FBT003
                rect = text.get_rect(center=self._cell_center((row, col)))
                self._screen.blit(text, rect)

    def _draw_winning_line(self) -> None:
        result = self._snapshot.result
        if not isinstance(result, Win):
            return
        pygame.draw.line(
            self._screen,
            self.WIN_LINE_COLOR,
            self._cell_center(result.line[0]),
            self._cell_center(result.line[-1]),
            self.WIN_LINE_WIDTH,
        )

    def _draw_status(self) -> None:
        status = describe_status(self._snapshot)
        hint = "Click for a new game" if self._end_message else "R: new game   M: switch mode"
        status_text = self._small_font.render(status, True, self.TEXT_COLOR)  # noqa: FBT003
        hint_text = self._hint_font.render(hint, True, self.LINE_COLOR)  # noqa: FBT003
        status_rect = status_text.get_rect(center=(self.WINDOW_SIZE // 2, self.WINDOW_SIZE + self.STATUS_HEIGHT // 3))
        hint_rect = hint_text.get_rect(center=(self.WINDOW_SIZE // 2, self.WINDOW_SIZE + 3 * self.STATUS_HEIGHT // 4))
        self._screen.blit(status_text, status_rect)
        self._screen.blit(hint_text, hint_rect)

    def _cell_center(self, position: Position) -> tuple[int, int]:
        row, col = position
        return (col * self.CELL_SIZE + self.CELL_SIZE // 2, row * self.CELL_SIZE + self.CELL_SIZE // 2)
