"""Collision tests between a character and the other rectangles of the world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from gridfall.objects import GraphicsObject, Rect

# The character's box is shortened by this much so that it does not collide
# with a platform it visually stands above.
HEIGHT_SLACK = 10.0


@dataclass(frozen=True)
class Collision:
    """Where two objects overlap and along which axis the overlap is smaller."""

    X_AXIS: ClassVar[int] = 0
    Y_AXIS: ClassVar[int] = 1

    intersection: Rect
    direction: Optional[int]


def is_character_grounded(character: GraphicsObject, ground: GraphicsObject) -> bool:
    """True if the character's feet reach the ground's top and it is above the ground."""
    own = character.bounds
    other = ground.bounds
    return own.bottom >= other.top and own.right >= other.left and own.left <= other.right


def check_collision(obj: GraphicsObject, other: GraphicsObject) -> Optional[Collision]:
    """Collision between obj at its next position and other, or None if they do not meet.

    The next position is obj's bounds, shortened by HEIGHT_SLACK, moved by its velocity.
    The direction is X_AXIS when the overlap is narrower than it is tall, Y_AXIS when
    it is wider, and None when it is square.
    """
    bounds = obj.bounds
    vx, vy = obj.velocity
    upcoming = Rect(bounds.left + vx, bounds.top + vy, bounds.width, bounds.height - HEIGHT_SLACK)
    overlap = other.bounds.intersection(upcoming)
    if overlap is None:
        return None
    if overlap.width < overlap.height:
        direction: Optional[int] = Collision.X_AXIS
    elif overlap.width > overlap.height:
        direction = Collision.Y_AXIS
    else:
        direction = None
    return Collision(overlap, direction)