"""The game server: answers client requests and publishes the game state."""

from __future__ import annotations

import argparse
import logging
import random
import threading
import time
from typing import Callable, List, Optional, Sequence, Union

import zmq

from gridfall.piece import PATTERNS
from gridfall.protocol import (
    ACKNOWLEDGE,
    ConnectionTable,
    InputType,
    encode_client_id,
    parse_request,
)
from gridfall.server_state import ServerGameState

log = logging.getLogger(__name__)

REPLY_ADDRESS = "tcp://*:5555"
PUBLISH_ADDRESS = "tcp://*:5556"
SWEEP_INTERVAL = 200.0
PUBLISH_INTERVAL = 0.01
POLL_TIMEOUT_MS = 100

PieceSelector = Callable[[], Optional[str]]


def _random_piece() -> str:
    return random.choice(sorted(PATTERNS))


class GameServer:
    """Handles client requests, hands out pieces and tracks which clients are alive."""

    def __init__(
        self,
        state: Optional[ServerGameState] = None,
        piece_selector: Optional[PieceSelector] = None,
    ) -> None:
        self.state = state if state is not None else ServerGameState()
        self.piece_selector = piece_selector if piece_selector is not None else _random_piece
        self.connections = ConnectionTable()
        self.sweep_interval = SWEEP_INTERVAL
        self._stop = threading.Event()

    def handle_request(self, message: Union[bytes, str]) -> bytes:
        """Answer one client message.

        A new or unknown client is given an id, sent as four bytes. A known client's
        inputs are applied; the reply is the next piece kind if one was asked for and
        chosen, otherwise the acknowledgement 'R'.
        """
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        request = parse_request(message)

        if request.is_new_client or request.client_id not in self.connections:
            client_id = self.connections.connect()
            log.info("Client %s connected.", client_id)
            return encode_client_id(int(client_id))

        client_id = request.client_id
        self.connections.touch(client_id)
        next_piece: Optional[str] = None
        for code in request.inputs:
            if code == InputType.PAUSE:
                self.state.input(client_id, str(int(code)))
            elif code == InputType.CLOSE:
                log.info("Client %s disconnected.", client_id)
                self.connections.disconnect(client_id)
            elif code == InputType.NEW_PIECE:
                chosen = self.piece_selector()
                if chosen is not None:
                    next_piece = chosen
        return (next_piece if next_piece is not None else ACKNOWLEDGE).encode("utf-8")

    def sweep_disconnects(self) -> List[str]:
        """Drop clients that sent nothing since the previous sweep and return their ids."""
        removed = self.connections.sweep()
        for client_id in removed:
            log.info("Client %s disconnected.", client_id)
        return removed

    def _reply_loop(self, socket: "zmq.Socket") -> None:
        poller = zmq.Poller()
        poller.register(socket, zmq.POLLIN)
        while not self._stop.is_set():
            if not poller.poll(POLL_TIMEOUT_MS):
                continue
            message = socket.recv()
            try:
                reply = self.handle_request(message)
            except ValueError as error:
                log.warning("bad request %r: %s", message, error)
                reply = ACKNOWLEDGE.encode("utf-8")
            socket.send(reply)

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            if len(self.connections) > 0:
                self.sweep_disconnects()

    def serve(self, reply_address: str = REPLY_ADDRESS, publish_address: str = PUBLISH_ADDRESS) -> None:
        """Run the server until interrupted, publishing the state while clients are connected."""
        self._stop.clear()
        context = zmq.Context()
        reply_socket = context.socket(zmq.REP)
        publish_socket = context.socket(zmq.PUB)
        threads: List[threading.Thread] = []
        try:
            reply_socket.bind(reply_address)
            publish_socket.bind(publish_address)
            threads = [
                threading.Thread(target=self._reply_loop, args=(reply_socket,), daemon=True),
                threading.Thread(target=self._sweep_loop, daemon=True),
            ]
            for thread in threads:
                thread.start()
            while not self._stop.is_set():
                if len(self.connections) > 0:
                    self.state.update()
                    publish_socket.send_string(self.state.serialize())
                time.sleep(PUBLISH_INTERVAL)
        finally:
            self._stop.set()
            for thread in threads:
                thread.join(timeout=1.0)
            reply_socket.close(linger=0)
            publish_socket.close(linger=0)
            context.term()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="gridfall-server", description="Run the game server.")
    parser.add_argument("--reply", default=REPLY_ADDRESS, help="address for client requests")
    parser.add_argument("--publish", default=PUBLISH_ADDRESS, help="address to publish state on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        GameServer().serve(args.reply, args.publish)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())