"""
Tests for the application entry point and factory.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chatrelay.app.factory import create_app
from chatrelay.realtime.connection_manager import ConnectionManager


def test_main_exposes_configured_app():
    from chatrelay import main

    assert isinstance(main.app, FastAPI)
    assert isinstance(main.app.state.connection_manager, ConnectionManager)


@pytest.mark.timeout(15)
def test_create_app_serves_http_and_websocket_routes():
    client = TestClient(create_app())

    assert client.get("/").status_code == 200
    assert client.get("/health").json()["status"] == "ok"
    for path in ("/", "/ws"):
        with client.websocket_connect(path) as websocket:
            assert websocket.receive_json()["type"] == "system"


def test_each_app_owns_one_manager():
    manager = ConnectionManager()

    assert create_app(manager).state.connection_manager is manager
    assert create_app().state.connection_manager is not create_app().state.connection_manager
