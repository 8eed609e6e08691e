from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

from tic_tac_toe_ai.exception import InvalidMoveError

BOARD_SIZE: Final = 3
EMPTY_CHARS: Final = frozenset(". _")

Mark: TypeAlias = Literal["X", "O"]
Cell: TypeAlias = Mark | None
Grid: TypeAlias = list[list[Cell]]
Position: TypeAlias = tuple[int, int]
Line: TypeAlias = tuple[Position, Position, Position]

WINNING_LINES: Final[tuple[Line, ...]] = (
    # Rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # Columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # Diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


@dataclass(frozen=True, slots=True)
class Move:
    player: Mark
    row: int
    col: int


def opponent(mark: Mark) -> Mark:
    return "O" if mark == "X" else "X"


def find_winning_line(grid: Grid) -> Line | None:
    for line in WINNING_LINES:
        (r0, c0), (r1, c1), (r2, c2) = line
        first = grid[r0][c0]
        if first is not None and first == grid[r1][c1] == grid[r2][c2]:
            return line
    return None


def get_available_positions(grid: Grid) -> list[Position]:
    return [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if grid[r][c] is None]


def is_grid_full(grid: Grid) -> bool:
    return all(all(cell is not None for cell in row) for row in grid)


class Board:
    def __init__(self, rows: Iterable[Iterable[Cell]] | None = None) -> None:
        if rows is None:
            self._grid: Grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
            return

        grid = [list(row) for row in rows]
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            msg = f"Board must be {BOARD_SIZE}x{BOARD_SIZE}."
            raise ValueError(msg)
        if any(cell not in ("X", "O", None) for row in grid for cell in row):
            raise ValueError("Cells must be 'X', 'O' or None.")
        self._grid = grid

        x_count, o_count = self.count("X"), self.count("O")
        if x_count - o_count not in (0, 1):
            msg = f"Invalid mark counts: {x_count} X, {o_count} O."
            raise ValueError(msg)

    @classmethod
    def from_strings(cls, *rows: str) -> "Board":
        """Build a board from row strings such as ``"XO."``; ``.``, ``_`` or a space mark an empty cell."""
        return cls([[None if char in EMPTY_CHARS else char for char in row] for row in rows])

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    def grid(self) -> Grid:
        """Return a mutable copy of the cells, for search code that needs scratch space."""
        return [row[:] for row in self._grid]

    def clone(self) -> "Board":
        copied = Board()
        copied._grid = self.grid()
        return copied

    def __getitem__(self, position: Position) -> Cell:
        row, col = position
        return self._grid[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __str__(self) -> str:
        return "\n".join("".join(cell or "." for cell in row) for row in self._grid)

    def place(self, position: Position, mark: Mark) -> None:
        row, col = position
        if not (0 <= row < BOARD_SIZE) or not (0 <= col < BOARD_SIZE):
            raise InvalidMoveError("Move out of bounds.")

        if self._grid[row][col] is not None:
            raise InvalidMoveError("Cell occupied.")

        self._grid[row][col] = mark

    def available_positions(self) -> list[Position]:
        return get_available_positions(self._grid)

    def is_full(self) -> bool:
        return is_grid_full(self._grid)

    def count(self, mark: Mark) -> int:
        return sum(cell == mark for row in self._grid for cell in row)

    def next_mark(self) -> Mark:
        return "X" if self.count("X") == self.count("O") else "O"

    def winning_line(self) -> Line | None:
        return find_winning_line(self._grid)
