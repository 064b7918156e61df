"""Rectangular world objects: platforms, items, death zones, side boundaries, spawn points."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Tuple

from gridfall.board import Color
from gridfall.timeline import Timeline

Vector = Tuple[float, float]

DISPLACEMENT = 0.025

BLACK: Color = (0, 0, 0)
RED: Color = (255, 0, 0)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        """The overlapping rectangle, or None if the two only touch or are apart."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if left < right and top < bottom:
            return Rect(left, top, right - left, bottom - top)
        return None


class CollisionType(Enum):
    STOP_MOVEMENT = 0
    ERASE = 1
    PUSH = 2
    CHAR = 3
    DEATH = 4
    SCROLL = 5
    NONE = 6


class ObjectType(IntEnum):
    CHARACTER = 1
    PLATFORM = 2
    ITEM = 3
    DEATHZONE = 4
    SIDE_BOUNDARY = 5
    SPAWN_POINT = 6


MovementFunction = Callable[["GraphicsObject"], None]


class GraphicsObject(ABC):
    """A rectangle in the world with a position, a velocity and a timeline."""

    collision_x: CollisionType = CollisionType.NONE
    collision_y: CollisionType = CollisionType.NONE

    def __init__(
        self,
        size: Vector,
        position: Vector,
        is_ground: bool,
        identifier: int,
        timeline: Optional[Timeline],
    ) -> None:
        self.size: Vector = (float(size[0]), float(size[1]))
        self.position: Vector = (float(position[0]), float(position[1]))
        self.original_position: Vector = self.position
        self.is_ground = is_ground
        self.identifier = identifier
        self.timeline = timeline
        self.guid = f"gameobject{identifier}"
        self.motion: Vector = (0.0, 0.0)
        self.previous_velocity: Vector = (0.0, 0.0)
        self.outline_thickness = 0.0
        self.fill_color: Optional[Color] = None
        self.outline_color: Optional[Color] = None
        self.texture: Optional[str] = None
        self.movement_function: Optional[MovementFunction] = None
        self.lock = threading.RLock()

    @property
    @abstractmethod
    def object_type(self) -> ObjectType:
        """The kind of object."""

    @property
    def bounds(self) -> Rect:
        """The rectangle the object covers on screen, outline included."""
        with self.lock:
            x, y = self.position
        w, h = self.size
        t = self.outline_thickness
        return Rect(x - t, y - t, w + 2 * t, h + 2 * t)

    def move(self, dx: float, dy: float) -> None:
        with self.lock:
            x, y = self.position
            self.position = (x + dx, y + dy)

    @property
    def velocity(self) -> Vector:
        """The current velocity, or the last non-zero one while standing still."""
        if self.motion == (0.0, 0.0) and self.previous_velocity != (0.0, 0.0):
            return self.previous_velocity
        return self.motion

    @velocity.setter
    def velocity(self, value: Vector) -> None:
        with self.lock:
            self.motion = (float(value[0]), float(value[1]))

    def _push(self, sx: float, sy: float) -> None:
        if self.timeline is None:
            raise RuntimeError(f"object {self.identifier} has no timeline to move by")
        dt = self.timeline.dt
        if dt != 0:
            step = DISPLACEMENT / dt * self.timeline.tic_size
            with self.lock:
                vx, vy = self.motion
                self.motion = (vx + sx * step, vy + sy * step)
        self.update_movement()

    def left(self) -> None:
        self._push(-1.0, 0.0)

    def up(self) -> None:
        self._push(0.0, -1.0)

    def right(self) -> None:
        self._push(1.0, 0.0)

    def down(self) -> None:
        self._push(0.0, 1.0)

    def update_movement(self) -> None:
        """Apply the current velocity to the position, then stop."""
        vx, vy = self.motion
        self.move(vx, vy)
        self.block_move()

    def block_move(self) -> None:
        """Remember the current velocity and set it to zero."""
        with self.lock:
            self.previous_velocity = self.motion
            self.motion = (0.0, 0.0)


PLATFORM_SIZE: Vector = (256.0, 10.0)
PLATFORM_COLORS: List[Color] = [(210, 250, 212), (210, 211, 250), (247, 210, 250)]


class Platform(GraphicsObject):
    """A ground surface that characters stand on."""

    object_type = ObjectType.PLATFORM
    collision_x = CollisionType.STOP_MOVEMENT
    collision_y = CollisionType.NONE

    def __init__(
        self,
        position: Vector,
        identifier: int,
        timeline: Optional[Timeline],
        color_index: int = 0,
    ) -> None:
        super().__init__(PLATFORM_SIZE, position, True, identifier, timeline)
        if not 0 <= color_index < len(PLATFORM_COLORS):
            raise IndexError(f"no platform colour {color_index}")
        self.fill_color = PLATFORM_COLORS[color_index]
        self.outline_color = BLACK
        self.outline_thickness = 2.0


ITEM_SIZE: Vector = (100.2, 64.6)
ITEM_IMAGE = "images/money.png"


class Item(GraphicsObject):
    """A collectable object that disappears on contact."""

    object_type = ObjectType.ITEM
    collision_x = CollisionType.ERASE
    collision_y = CollisionType.ERASE

    def __init__(self, position: Vector, identifier: int, timeline: Optional[Timeline]) -> None:
        super().__init__(ITEM_SIZE, position, False, identifier, timeline)
        self.texture = ITEM_IMAGE


DEATH_ZONE_SIZE: Vector = (4000.0, 80.0)


class DeathZone(GraphicsObject):
    """An area that kills a character touching it."""

    object_type = ObjectType.DEATHZONE
    collision_x = CollisionType.DEATH
    collision_y = CollisionType.DEATH

    def __init__(self, position: Vector, identifier: int, timeline: Optional[Timeline]) -> None:
        super().__init__(DEATH_ZONE_SIZE, position, False, identifier, timeline)


SIDE_BOUNDARY_SIZE: Vector = (500.0, 800.0)


class SideBoundary(GraphicsObject):
    """A wall at one side of the world that a character cannot pass."""

    RIGHT = 0
    LEFT = 1

    object_type = ObjectType.SIDE_BOUNDARY
    collision_x = CollisionType.SCROLL
    collision_y = CollisionType.SCROLL

    def __init__(
        self,
        position: Vector,
        identifier: int,
        timeline: Optional[Timeline],
        direction: int,
    ) -> None:
        if direction not in (self.RIGHT, self.LEFT):
            raise ValueError(f"direction must be RIGHT or LEFT, got {direction}")
        super().__init__(SIDE_BOUNDARY_SIZE, position, False, identifier, timeline)
        self.direction = direction
        self.fill_color = RED


SPAWN_POINT_SIZE: Vector = (1.0, 1.0)
SPAWN_POINT_POSITION: Vector = (100.0, 0.0)


class SpawnPoint(GraphicsObject):
    """The place where a character reappears."""

    object_type = ObjectType.SPAWN_POINT

    def __init__(self) -> None:
        super().__init__(SPAWN_POINT_SIZE, SPAWN_POINT_POSITION, False, -1, None)