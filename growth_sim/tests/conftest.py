import pytest
from flask import Flask
from flask.testing import FlaskClient

from growth_sim.app import create_app


@pytest.fixture()
def db_path(tmp_path) -> str:
    return str(tmp_path / "growth_sim.db")


@pytest.fixture()
def app(db_path) -> Flask:
    return create_app({"TESTING": True, "DATABASE_PATH": db_path})


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
