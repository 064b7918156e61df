"""Wire formats shared by the game server and its clients, and the server's client table."""

from __future__ import annotations

import struct
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Tuple

NEW_CLIENT = "REQ"
ACKNOWLEDGE = "R"

_CLIENT_ID = struct.Struct("<i")


class InputType(IntEnum):
    """Codes a client sends to the server after its id."""

    PAUSE = 0
    CLOSE = 1
    NEW_PIECE = 2


@dataclass(frozen=True)
class ClientRequest:
    """A decoded client message: who sent it and which inputs it carries."""

    client_id: str
    inputs: Tuple[InputType, ...] = ()

    @property
    def is_new_client(self) -> bool:
        return self.client_id == NEW_CLIENT


def split(text: str, delimiter: str) -> List[str]:
    """Split on a delimiter; a trailing empty field is dropped, as is the only field of ''."""
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def format_request(client_id: str, inputs: Iterable[InputType]) -> str:
    """The request line a client sends: its id, a space, then ' <code>' per input."""
    return f"{client_id} " + "".join(f" {int(code)}" for code in inputs)


def parse_request(message: str) -> ClientRequest:
    """Decode a request line; empty fields and unknown codes are ignored."""
    fields = split(message, " ")
    if not fields:
        raise ValueError("empty request")
    known = {str(int(code)): code for code in InputType}
    inputs = tuple(known[field] for field in fields[1:] if field in known)
    return ClientRequest(fields[0], inputs)


def encode_client_id(number: int) -> bytes:
    """The four-byte reply that tells a new client its id."""
    return _CLIENT_ID.pack(number)


def decode_client_id(data: bytes) -> int:
    if len(data) != _CLIENT_ID.size:
        raise ValueError(f"client id must be {_CLIENT_ID.size} bytes, got {len(data)}")
    return _CLIENT_ID.unpack(data)[0]


def format_state(dt: float, tic_size: float) -> str:
    """The state the server publishes each frame: '[ dt tic_size ]'."""
    return f"[ {dt:g} {tic_size:g} ]"


def parse_state(data: str) -> Tuple[float, float]:
    """Read (dt, tic_size) from a published state string."""
    groups = split(data, "]")
    if not groups:
        raise ValueError("empty state message")
    fields = split(groups[0], " ")
    if len(fields) < 3:
        raise ValueError(f"malformed state message: {data!r}")
    return float(fields[1]), float(fields[2])


class ConnectionTable:
    """Connected clients and how many messages each sent since the last sweep."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def connect(self) -> str:
        """Register a new client and return the id assigned to it."""
        with self._lock:
            client_id = str(self._next_id)
            self._next_id += 1
            self._counts[client_id] = 1
            return client_id

    def touch(self, client_id: str) -> None:
        """Count a message from a known client."""
        with self._lock:
            if client_id not in self._counts:
                raise KeyError(client_id)
            self._counts[client_id] += 1

    def disconnect(self, client_id: str) -> bool:
        """Forget a client; False if it was not connected."""
        with self._lock:
            return self._counts.pop(client_id, None) is not None

    def sweep(self) -> List[str]:
        """Remove clients silent since the last sweep, reset the counts, return the removed ids."""
        with self._lock:
            silent = [client_id for client_id, count in self._counts.items() if count == 0]
            for client_id in silent:
                del self._counts[client_id]
            for client_id in self._counts:
                self._counts[client_id] = 0
            return silent

    def __contains__(self, client_id: object) -> bool:
        with self._lock:
            return client_id in self._counts

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)