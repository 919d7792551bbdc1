from __future__ import annotations

import json
import random
from collections.abc import Generator

import pytest
from flask.testing import FlaskClient

from spawner import TileSpawner
from storage import STORAGE_KEY


@pytest.fixture()
def spawner() -> TileSpawner:
    return TileSpawner(rng=random.Random(2048))


@pytest.fixture()
def client() -> Generator[FlaskClient, None, None]:
    """Flask test client with a fixed spawn seed; config is restored afterwards."""

    from app import app

    saved = dict(app.config)
    app.config.update(TESTING=True, SPAWN_SEED=7)
    with app.test_client() as c:
        yield c
    app.config.clear()
    app.config.update(saved)


@pytest.fixture()
def seed_game(client: FlaskClient):
    """Write a saved game straight into the client's session."""

    def _seed(board, score: int = 0, finished: bool = False) -> None:
        with client.session_transaction() as sess:
            sess[STORAGE_KEY] = json.dumps({"map": board, "score": score, "finished": finished})

    return _seed
