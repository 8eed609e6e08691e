from dataclasses import dataclass
from typing import Final, TypeAlias, cast

from tic_tac_toe_ai.board import Board, Line, Mark


@dataclass(frozen=True, slots=True)
class InProgress:
    pass


@dataclass(frozen=True, slots=True)
class Win:
    mark: Mark
    line: Line


@dataclass(frozen=True, slots=True)
class Draw:
    pass


GameResult: TypeAlias = InProgress | Win | Draw

IN_PROGRESS: Final = InProgress()
DRAW: Final = Draw()


def check_result(board: Board) -> GameResult:
    """Compute the result of a board from scratch.

    The winning lines are scanned in a fixed order (rows, columns, diagonals) and the
    first uniform non-empty one wins. A full board without such a line is a draw.
    """
    line = board.winning_line()
    if line is not None:
        return Win(cast("Mark", board[line[0]]), line)
    if board.is_full():
        return DRAW
    return IN_PROGRESS


def is_terminal(result: GameResult) -> bool:
    return not isinstance(result, InProgress)
