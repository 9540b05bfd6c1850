import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest
from fastapi.testclient import TestClient
import fakeredis
import fakeredis.aioredis

from rsvp_api.config import clear_settings_cache
from rsvp_api.store import RedisKeyedStore


class _AwaitableRedis:
    def __init__(self, client):
        self._client = client

    def __await__(self):
        async def _coro():
            return self._client

        return _coro().__await__()


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(fake_server):
    return fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def store(fake_redis):
    return RedisKeyedStore(fake_redis, namespace="test:")


@pytest.fixture
def client(monkeypatch, fake_server):
    import rsvp_api.lifespan as lifespan
    import rsvp_api.main as main

    def fake_redis_constructor(*_args, **_kwargs):
        fake = fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)
        return _AwaitableRedis(fake)

    monkeypatch.setenv("ENABLE_EVENTS_DB", "0")
    clear_settings_cache()
    monkeypatch.setattr(lifespan.redis, "Redis", fake_redis_constructor)

    with TestClient(main.app, raise_server_exceptions=False) as c:
        yield c
    clear_settings_cache()
