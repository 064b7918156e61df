import pytest

from gridfall.piece import PATTERNS
from gridfall.protocol import InputType, decode_client_id, format_request
from gridfall.server import GameServer, main
from gridfall.server_state import ServerGameState
from gridfall.timeline import Timeline


def make_server(selector=lambda: "t"):
    timeline = Timeline()
    return GameServer(ServerGameState(timeline), selector), timeline


def test_new_clients_get_sequential_ids():
    server, _ = make_server()
    assert decode_client_id(server.handle_request(b"REQ")) == 0
    assert decode_client_id(server.handle_request(b"REQ")) == 1
    assert "0" in server.connections
    assert len(server.connections) == 2


def test_unknown_client_is_treated_as_new():
    server, _ = make_server()
    reply = server.handle_request(format_request("42", []))
    assert decode_client_id(reply) == 0
    assert "42" not in server.connections


def test_known_client_without_inputs_is_acknowledged():
    server, _ = make_server()
    server.handle_request(b"REQ")
    assert server.handle_request(format_request("0", []).encode()) == b"R"


def test_new_piece_request_returns_selected_piece():
    server, _ = make_server(lambda: "s")
    server.handle_request(b"REQ")
    reply = server.handle_request(format_request("0", [InputType.NEW_PIECE]))
    assert reply == b"s"


def test_selector_without_choice_is_acknowledged():
    server, _ = make_server(lambda: None)
    server.handle_request(b"REQ")
    reply = server.handle_request(format_request("0", [InputType.NEW_PIECE]))
    assert reply == b"R"


def test_default_selector_hands_out_known_pieces():
    server = GameServer(ServerGameState(Timeline()))
    server.handle_request(b"REQ")
    for _ in range(10):
        reply = server.handle_request(format_request("0", [InputType.NEW_PIECE]))
        assert reply.decode() in PATTERNS


def test_pause_input_pauses_timeline():
    server, timeline = make_server()
    server.handle_request(b"REQ")
    assert server.handle_request(format_request("0", [InputType.PAUSE])) == b"R"
    assert timeline.paused is True


def test_close_input_disconnects_client():
    server, _ = make_server()
    server.handle_request(b"REQ")
    assert server.handle_request(format_request("0", [InputType.CLOSE])) == b"R"
    assert "0" not in server.connections
    assert decode_client_id(server.handle_request(format_request("0", []))) == 1


def test_empty_request_is_rejected():
    server, _ = make_server()
    with pytest.raises(ValueError):
        server.handle_request(b"")


def test_sweep_removes_silent_clients():
    server, _ = make_server()
    server.handle_request(b"REQ")
    server.handle_request(b"REQ")
    assert server.sweep_disconnects() == []
    server.handle_request(format_request("1", []))
    assert server.sweep_disconnects() == ["0"]
    assert "0" not in server.connections
    assert "1" in server.connections


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2