"""
Tests for the judge line protocol
"""
import io

import pytest
from orebot.models import Action, Coordinate, ItemType
from orebot.protocol import JudgeClient, ProtocolError

TURN = """3 2
10 4
? 0 2 1 0 0
1 0 ? 1 ? 0
4 0 5
0 0 1 1 -1
1 0 -1 -1 4
2 1 2 0 -1
3 2 2 1 -1
"""


def client_for(text):
    out = io.StringIO()
    return JudgeClient(io.StringIO(text), out), out


def test_read_init_and_turn():
    client, _ = client_for(TURN)
    assert client.read_init() == (3, 2)

    board = client.read_turn()

    assert (board.width, board.height) == (3, 2)
    assert (board.my_score, board.enemy_score) == (10, 4)
    assert (board.radar_cooldown, board.trap_cooldown) == (0, 5)

    assert board.cell(Coordinate(0, 0)).known == False
    assert board.cell(Coordinate(1, 0)).known == True
    assert board.cell(Coordinate(1, 0)).ore == 2
    assert board.cell(Coordinate(1, 0)).hole == True
    assert board.cell(Coordinate(2, 0)).known == True
    assert board.cell(Coordinate(2, 0)).ore == 0
    assert board.cell(Coordinate(0, 1)).ore == 1
    assert board.cell(Coordinate(1, 1)).hole == True


def test_entities_are_sorted_into_board():
    client, _ = client_for(TURN)
    client.read_init()
    board = client.read_turn()

    assert [unit.id for unit in board.units] == [0, 1]
    assert board.units[0].position == Coordinate(1, 1)
    assert board.units[0].item is ItemType.NONE
    assert board.units[1].alive == False
    assert board.units[1].item is ItemType.ORE
    assert [unit.id for unit in board.enemies] == [2]
    assert board.radars == [Coordinate(2, 1)]
    assert board.traps == []


def test_bad_row_raises_protocol_error():
    client, _ = client_for("3 2\n0 0\n? 0 ? 0\n")
    client.read_init()
    with pytest.raises(ProtocolError):
        client.read_turn()


def test_bad_entity_type_raises_protocol_error():
    text = "1 1\n0 0\n? 0\n1 0 0\n0 7 0 0 -1\n"
    client, _ = client_for(text)
    client.read_init()
    with pytest.raises(ProtocolError):
        client.read_turn()


def test_end_of_input():
    client, _ = client_for("3 2\n")
    client.read_init()
    with pytest.raises(EOFError):
        client.read_turn()


def test_send_writes_one_line_per_action():
    client, out = client_for("")
    client.send([
        Action.wait(),
        Action.move(Coordinate(0, 4)),
        Action.dig(Coordinate(9, 4)),
        Action.request(ItemType.RADAR),
        Action.request(ItemType.TRAP),
    ])
    assert out.getvalue().splitlines() == [
        "WAIT",
        "MOVE 0 4",
        "DIG 9 4",
        "REQUEST RADAR",
        "REQUEST TRAP",
    ]
