"""The player character: gravity, jumping, ground friction and world bounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from gridfall.collider import check_collision, is_character_grounded
from gridfall.objects import (
    CollisionType,
    DeathZone,
    GraphicsObject,
    ObjectType,
    SideBoundary,
    SpawnPoint,
    Vector,
)
from gridfall.timeline import Timeline

CHARACTER_SIZE: Vector = (116.0, 256.0)
CHARACTER_IMAGE = "images/girl.png"
DISPLACEMENT = 0.15
FRICTION = 3.2
GRAVITY = 700.0
ACCELERATION = -2500.0
BOUNDARY_GAP = 0.1
GROUND_LIFT_LIMIT = 1.0
GROUND_LIFT = 5.0


@dataclass
class Surroundings:
    """What a character sees of the world: frame timing and the objects around it."""

    dt: float = 0.0
    tic_size: float = 1.0
    objects: List[GraphicsObject] = field(default_factory=list)
    side_boundaries: List[SideBoundary] = field(default_factory=list)
    death_zone: Optional[DeathZone] = None
    on_death: Optional[Callable[["Character"], None]] = None


class Character(GraphicsObject):
    """A player-controlled figure that falls, jumps and stands on platforms."""

    object_type = ObjectType.CHARACTER
    collision_x = CollisionType.CHAR
    collision_y = CollisionType.CHAR

    def __init__(
        self,
        position: Vector,
        identifier: int,
        timeline: Optional[Timeline] = None,
        surroundings: Optional[Surroundings] = None,
        spawn_point: Optional[SpawnPoint] = None,
    ) -> None:
        super().__init__(CHARACTER_SIZE, position, False, identifier, timeline)
        self.texture = CHARACTER_IMAGE
        self.surroundings = surroundings if surroundings is not None else Surroundings()
        self.spawn_point = spawn_point
        self.respawned = False
        self.gravity = GRAVITY
        self.acceleration = ACCELERATION

    def _timing(self) -> Tuple[float, float]:
        return self.surroundings.dt, self.surroundings.tic_size

    def _nudge(self, sx: float, sy: float) -> None:
        dt, tic = self._timing()
        if dt != 0:
            step = DISPLACEMENT / dt * tic
            with self.lock:
                vx, vy = self.motion
                self.motion = (vx + sx * step, vy + sy * step)
        self.update_movement()

    def left(self) -> None:
        self._nudge(-1.0, 0.0)

    def right(self) -> None:
        self._nudge(1.0, 0.0)

    def down(self) -> None:
        self._nudge(0.0, 1.0)

    def up(self) -> None:
        """Jump: set the vertical velocity from the jump acceleration."""
        dt, tic = self._timing()
        with self.lock:
            vx, _vy = self.motion
            self.motion = (vx, self.acceleration * dt * tic)
        self.update_movement()

    def _ground(self) -> Optional[GraphicsObject]:
        return next(
            (
                obj
                for obj in self.surroundings.objects
                if obj.is_ground and is_character_grounded(self, obj)
            ),
            None,
        )

    def update_movement(self) -> None:
        """Apply gravity or ground friction, keep inside the world, move, then stop."""
        ground = self._ground()
        dt, tic = self._timing()
        with self.lock:
            vx, vy = self.motion
            if ground is None:
                vy += self.gravity * dt * tic
            else:
                if vy > 0:
                    vy = 0.0
                gx, gy = ground.velocity
                vx += gx * FRICTION
                vy += gy * FRICTION
                # Stay ahead of a platform moving down so the character is not drawn under it.
                if vy > GROUND_LIFT_LIMIT:
                    vy -= GROUND_LIFT
            self.motion = (vx, vy)
        self._enforce_bounds()
        vx, vy = self.motion
        self.move(vx, vy)
        self.block_move()

    def _enforce_bounds(self) -> None:
        x, y = self.position
        bounds = self.bounds
        if bounds.top < 0.0:
            with self.lock:
                self.position = (x, BOUNDARY_GAP)
            return

        for boundary in self.surroundings.side_boundaries:
            if check_collision(self, boundary) is None:
                continue
            if boundary.direction == SideBoundary.RIGHT:
                with self.lock:
                    self.position = (boundary.position[0] - BOUNDARY_GAP - bounds.width, y)
            elif boundary.direction == SideBoundary.LEFT:
                with self.lock:
                    self.position = (BOUNDARY_GAP, y)

        death_zone = self.surroundings.death_zone
        if death_zone is not None and check_collision(self, death_zone) is not None:
            if self.surroundings.on_death is not None:
                self.surroundings.on_death(self)

    def respawn(self) -> None:
        """Put the character back at a fresh spawn point, standing still."""
        self.respawned = True
        self.spawn_point = SpawnPoint()
        with self.lock:
            self.position = self.spawn_point.position
            self.motion = (0.0, 0.0)

    def was_respawned(self) -> bool:
        """True once after each respawn."""
        if self.respawned:
            self.respawned = False
            return True
        return False