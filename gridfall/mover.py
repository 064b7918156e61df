"""Repeating movement patterns for objects that move on their own."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from gridfall.objects import GraphicsObject


@dataclass
class ClockwiseMovement:
    """Move left, up, right and down around a square starting at the original position.

    direction: 0 left, 1 up, 2 right, 3 down.
    """

    DISTANCE: ClassVar[float] = 100.0
    direction: int = 0

    def __call__(self, obj: GraphicsObject) -> None:
        ox, oy = obj.original_position
        x, y = obj.position
        x_diff = ox - x
        y_diff = oy - y

        if self.direction == 0:
            obj.left()
            if x_diff >= self.DISTANCE:
                self.direction = 1
        if self.direction == 1:
            obj.up()
            if y_diff >= self.DISTANCE:
                self.direction = 2
        if self.direction == 2:
            obj.right()
            if x_diff <= 0:
                self.direction = 3
        if self.direction == 3:
            obj.down()
            if y_diff <= 0:
                self.direction = 0


@dataclass
class LeftRightMovement:
    """Move left from the original position and back again.

    direction: 0 left, 1 right.
    """

    DISTANCE: ClassVar[float] = 200.0
    direction: int = 0

    def __call__(self, obj: GraphicsObject) -> None:
        ox, _oy = obj.original_position
        x, _y = obj.position
        x_diff = ox - x

        if self.direction == 0:
            obj.left()
            if x_diff >= self.DISTANCE:
                self.direction = 1
        if self.direction == 1:
            obj.right()
            if x_diff <= 0:
                self.direction = 0


@dataclass
class UpDownMovement:
    """Move down from the original position and back up again.

    direction: 0 down, 1 up.
    """

    DISTANCE: ClassVar[float] = 200.0
    direction: int = 0

    def __call__(self, obj: GraphicsObject) -> None:
        _ox, oy = obj.original_position
        _x, y = obj.position
        y_diff = y - oy

        if self.direction == 0:
            obj.down()
            if y_diff >= self.DISTANCE:
                self.direction = 1
        if self.direction == 1:
            obj.up()
            if y_diff <= 0:
                self.direction = 0