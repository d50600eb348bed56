import pytest

from keypad_calc.controller import CalculatorController
from keypad_calc.display import TextDisplay
from keypad_calc.engine import Calculator
from keypad_calc.webapp import server


@pytest.fixture
def client(monkeypatch):
    display = TextDisplay()
    monkeypatch.setattr(server, "display", display)
    monkeypatch.setattr(server, "controller", CalculatorController(display))
    monkeypatch.setattr(server, "calculator", Calculator())
    return server.app.test_client()


def press(client, action, value=None):
    return client.post("/api/keypad", json={"action": action, "value": value})


def test_keypad_chain(client):
    for action, value in [("digit", "1"), ("digit", "2"), ("op", "+"), ("digit", "3"),
                          ("digit", "4"), ("op", "-"), ("digit", "6")]:
        assert press(client, action, value).status_code == 200
    resp = press(client, "equals")
    data = resp.get_json()
    assert data["display"] == "40"
    assert data["state"]["waiting_for_second_operand"] is True

    history = client.get("/api/keypad/history").get_json()["history"]
    assert [r["result"] for r in history] == [46, 40]


def test_keypad_error_is_state_not_status(client):
    press(client, "digit", "5")
    press(client, "op", "/")
    press(client, "digit", "0")
    resp = press(client, "equals")
    assert resp.status_code == 200
    assert resp.get_json()["error"] == "Cannot divide by zero"


def test_keypad_bad_requests(client):
    assert client.post("/api/keypad", json={}).status_code == 400
    assert press(client, "launch").status_code == 400
    resp = press(client, "digit", "x")
    assert resp.status_code == 400
    assert "Invalid digit" in resp.get_json()["error"]
    assert press(client, "op", "^").status_code == 400


def test_keypad_reset(client):
    press(client, "digit", "9")
    press(client, "op", "+")
    press(client, "digit", "1")
    press(client, "equals")
    data = client.post("/api/keypad/reset").get_json()
    assert data["display"] == "0"
    assert data["state"]["first_operand"] is None
    assert client.get("/api/keypad/history").get_json()["history"] == []


def test_engine_operations(client):
    client.post("/api/engine", json={"operation": "set", "value": 10})
    data = client.post("/api/engine", json={"operation": "add", "value": "5"}).get_json()
    assert data["value"] == 15
    assert data["returned"] == 15

    data = client.post("/api/engine", json={"operation": "undo"}).get_json()
    assert data["value"] == 10
    assert data["returned"] is True

    state = client.get("/api/engine").get_json()
    assert [h["operation"] for h in state["history"]] == ["set"]


def test_engine_errors(client):
    client.post("/api/engine", json={"operation": "set", "value": 10})
    resp = client.post("/api/engine", json={"operation": "divide", "value": 0})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Cannot divide by zero"
    assert client.get("/api/engine").get_json()["value"] == 10

    assert client.post("/api/engine", json={"operation": "add", "value": "abc"}).status_code == 400
    assert client.post("/api/engine", json={"operation": "sqrt"}).status_code == 400
    assert client.post("/api/engine", data="nope").status_code == 400


def test_non_object_payloads_rejected(client):
    assert client.post("/api/keypad", json=[1]).status_code == 400
    assert client.post("/api/engine", json=[1]).status_code == 400
    assert client.post("/api/engine", json="add").status_code == 400


def test_engine_huge_integer_rejected(client):
    resp = client.post("/api/engine", json={"operation": "add", "value": 10**400})
    assert resp.status_code == 400
    assert "Invalid operand" in resp.get_json()["error"]
