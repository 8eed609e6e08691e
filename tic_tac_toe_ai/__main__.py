import logging
import sys
import threading
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tic_tac_toe_ai.config import configure_logging, parse_config
from tic_tac_toe_ai.game_controller import GameController

if TYPE_CHECKING:
    from tic_tac_toe_ai.ui import Ui

logger = logging.getLogger(__name__)


def _create_ui(name: str, controller: GameController) -> "Ui":
    # Imported lazily so that the terminal UI works without a display or pygame.
    match name:
        case "terminal":
            from tic_tac_toe_ai.ui_terminal import TerminalUi  # noqa: PLC0415

            return TerminalUi(controller)
        case "pygame":
            from tic_tac_toe_ai.ui_pygame import PygameUi  # noqa: PLC0415

            return PygameUi(controller)
        case _:
            msg = f"Unknown UI: {name}"
            raise ValueError(msg)


def main(argv: Sequence[str] | None = None) -> None:
    config = parse_config(argv)
    configure_logging(config.log_level, config.log_file)
    logger.info("Starting with %s", config)

    controller = GameController(config.mode, ai_delay=config.ai_delay)
    uis = [_create_ui(name, controller) for name in config.uis]

    # The first UI owns the main thread; the others run beside it.
    ui_threads = [threading.Thread(target=ui.run, daemon=True) for ui in uis[1:]]
    for ui_thread in ui_threads:
        ui_thread.start()

    main_ui = uis[0]
    starter = threading.Thread(target=_start_when_ready, args=(controller, uis), daemon=True)
    starter.start()
    try:
        main_ui.run()
    finally:
        controller.close()
    logger.info("Exiting")


def _start_when_ready(controller: GameController, uis: list["Ui"]) -> None:
    while not all(ui.running for ui in uis):
        time.sleep(0.1)
    controller.start()


if __name__ == "__main__":
    sys.exit(main())
