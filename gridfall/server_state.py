"""Server-side game state: the shared timeline and the objects in the world."""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from gridfall.objects import GraphicsObject, ObjectType
from gridfall.protocol import InputType, format_state
from gridfall.timeline import Timeline

log = logging.getLogger(__name__)


class ServerGameState:
    """The game as the server keeps it for all clients."""

    def __init__(
        self,
        timeline: Optional[Timeline] = None,
        on_pause: Optional[Callable[[], object]] = None,
    ) -> None:
        self.timeline = timeline if timeline is not None else Timeline()
        self.on_pause = on_pause if on_pause is not None else self.timeline.pause
        self._objects: List[GraphicsObject] = []
        self._next_id = 0
        self._lock = threading.RLock()

    def update(self) -> None:
        """Advance one frame: measure the time since the previous one."""
        self.timeline.update_delta_time()

    def serialize(self) -> str:
        """The state published to clients: '[ dt tic_size ]'."""
        with self._lock:
            return format_state(self.timeline.dt, self.timeline.tic_size)

    def input(self, object_id: str, code: str) -> None:
        """Apply an input code sent by a client; only PAUSE has an effect."""
        try:
            value = int(code)
        except ValueError:
            raise ValueError(f"input code must be an integer, got {code!r}") from None
        if value == InputType.PAUSE:
            log.debug("pause requested by client %s", object_id)
            self.on_pause()

    def new_character(self) -> int:
        """Reserve and return the id for a newly connected client's character."""
        with self._lock:
            identifier = self._next_id
            self._next_id += 1
        log.debug("new client connected %d", identifier)
        return identifier

    def add_character(self, character: GraphicsObject) -> None:
        with self._lock:
            self._objects.append(character)

    def update_character_position(self, character_id: str, x: float, y: float) -> None:
        """Place the character with the given id at (x, y)."""
        with self._lock:
            character = self.find_object(int(character_id))
            if character is None:
                raise KeyError(character_id)
            with character.lock:
                character.position = (float(x), float(y))

    def find_object(self, identifier: int) -> Optional[GraphicsObject]:
        with self._lock:
            return next((obj for obj in self._objects if obj.identifier == identifier), None)

    def remove_object(self, identifier: int) -> bool:
        """Remove the object with the given id; False if there was none."""
        with self._lock:
            obj = self.find_object(identifier)
            if obj is None:
                return False
            self._objects.remove(obj)
            return True

    def characters(self) -> List[GraphicsObject]:
        with self._lock:
            return [obj for obj in self._objects if obj.object_type == ObjectType.CHARACTER]