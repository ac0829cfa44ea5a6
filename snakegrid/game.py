from __future__ import annotations

import enum
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Hashable, Iterable, Iterator, List, Optional, Tuple

if TYPE_CHECKING:
    from snakegrid.render import Canvas

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Color = Tuple[float, float, float, float]
Square = Tuple[float, float, float]

GREEN: Color = (0.0, 1.0, 0.0, 1.0)
RED: Color = (1.0, 0.0, 0.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0, 1.0)

CELL_SIZE = 20
SPAWN_RANGE = 30


class InvariantViolation(RuntimeError):
    """Raised when the snake body is found empty."""


def add_pos(a: Cell, b: Cell) -> Cell:
    return a[0] + b[0], a[1] + b[1]


class Direction(enum.Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def offset(self) -> Cell:
        return self.value

    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.value[0] == -b.value[0] and a.value[1] == -b.value[1]


class Button(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


BUTTON_DIRECTIONS = {
    Button.UP: Direction.UP,
    Button.DOWN: Direction.DOWN,
    Button.LEFT: Direction.LEFT,
    Button.RIGHT: Direction.RIGHT,
}


def square(cell: Cell, cell_size: int) -> Square:
    return float(cell[0] * cell_size), float(cell[1] * cell_size), float(cell_size)


@dataclass
class StepResult:
    snake: List[Cell]
    food: Cell
    direction: Direction
    ate_food: bool


class Snake:
    """
    An ordered body of grid cells, head at index 0 and tail at the end.

    The snake only knows how to move, grow and compare its head with food.
    Whether a direction change is legal is decided by the caller.
    """

    def __init__(
        self,
        body: Iterable[Cell],
        direction: Direction = Direction.RIGHT,
        color: Color = RED,
    ) -> None:
        self.body: Deque[Cell] = deque(body)
        if not self.body:
            raise InvariantViolation("snake body must contain at least one cell")
        self.direction = direction
        self.color = color

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.body)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def set_direction(self, direction: Direction) -> None:
        self.direction = direction

    def move_forward(self) -> None:
        if not self.body:
            raise InvariantViolation("cannot move a snake with no body")
        new_head = add_pos(self.body[0], self.direction.offset)
        self.body.appendleft(new_head)
        self.body.pop()

    def grow(self) -> None:
        """Extend the tail one cell past its current end.

        The step is taken from the second-to-last cell towards the tail. A
        single-cell snake has no such reference and extends by (0, -1).
        """
        tail = self.body[-1]
        if len(self.body) > 1:
            before = self.body[-2]
            step = (tail[0] - before[0], tail[1] - before[1])
        else:
            step = (0, -1)
        self.body.append(add_pos(tail, step))

    def collides_with(self, food: "Food") -> bool:
        return self.head == food.position

    def squares(self, cell_size: int = CELL_SIZE) -> List[Square]:
        return [square(cell, cell_size) for cell in self.body]

    def render(self, canvas: "Canvas", cell_size: int = CELL_SIZE) -> None:
        for x, y, side in self.squares(cell_size):
            canvas.draw_square(x, y, side, self.color)


class Food:
    def __init__(self, x: int = 0, y: int = 0, color: Color = BLACK) -> None:
        self.position_x = x
        self.position_y = y
        self.color = color

    @property
    def position(self) -> Cell:
        return self.position_x, self.position_y

    def relocate(self, x: int, y: int) -> None:
        # Cells occupied by the snake are not excluded.
        self.position_x = x
        self.position_y = y

    def square(self, cell_size: int = CELL_SIZE) -> Square:
        return square(self.position, cell_size)

    def render(self, canvas: "Canvas", cell_size: int = CELL_SIZE) -> None:
        x, y, side = self.square(cell_size)
        canvas.draw_square(x, y, side, self.color)


class Game:
    def __init__(
        self,
        snake: Optional[Snake] = None,
        food: Optional[Food] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        spawn_range: int = SPAWN_RANGE,
        cell_size: int = CELL_SIZE,
        background: Color = GREEN,
    ) -> None:
        self.snake = snake if snake is not None else Snake([(0, 0), (0, 1)], Direction.RIGHT)
        self.food = food if food is not None else Food(0, 0)
        self.random = rng if rng is not None else random.Random(seed)
        self.spawn_range = spawn_range
        self.cell_size = cell_size
        self.background = background

    def update(self) -> StepResult:
        self.snake.move_forward()

        x = self.random.randrange(0, self.spawn_range)
        y = self.random.randrange(0, self.spawn_range)

        ate_food = False
        if self.snake.collides_with(self.food):
            logger.debug("food eaten at %s, relocating to %s", self.food.position, (x, y))
            self.snake.grow()
            self.food.relocate(x, y)
            ate_food = True

        return self._result(ate_food)

    def pressed(self, button: Hashable) -> bool:
        """Route a button press into a direction change.

        Returns True when the snake's direction was set. Unknown buttons and
        reversals onto the current direction are ignored.
        """
        candidate = BUTTON_DIRECTIONS.get(button)
        if candidate is None:
            return False
        if is_opposite(candidate, self.snake.direction):
            logger.debug("ignoring reversal %s -> %s", self.snake.direction.name, candidate.name)
            return False
        self.snake.set_direction(candidate)
        return True

    def render(self, canvas: "Canvas") -> None:
        canvas.clear(self.background)
        self.snake.render(canvas, self.cell_size)
        self.food.render(canvas, self.cell_size)

    def snapshot(self) -> StepResult:
        return self._result(ate_food=False)

    def _result(self, ate_food: bool) -> StepResult:
        return StepResult(
            snake=list(self.snake.body),
            food=self.food.position,
            direction=self.snake.direction,
            ate_food=ate_food,
        )
