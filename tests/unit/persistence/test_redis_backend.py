"""Unit tests for RedisCacheBackend using fakeredis."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
import pytest

from seaquote.core.exceptions import CacheError
from seaquote.persistence.redis_backend import RedisCacheBackend


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_client(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def backend(fake_client):
    with patch("redis.Redis", return_value=fake_client):
        return RedisCacheBackend(host="localhost", port=6379, db=0)


class TestGet:
    def test_returns_none_on_miss(self, backend):
        assert backend.get("nonexistent") is None

    def test_returns_stored_string(self, backend):
        backend.setex("parsed:abc:lenient", 300, '{"items": []}')
        assert backend.get("parsed:abc:lenient") == '{"items": []}'


class TestSetex:
    def test_prefixes_key_and_sets_ttl(self, backend, fake_client):
        backend.setex("mykey", 60, "v")
        assert fake_client.get("seaquote:mykey") == "v"
        assert 0 < fake_client.ttl("seaquote:mykey") <= 60

    def test_custom_prefix(self, fake_client):
        with patch("redis.Redis", return_value=fake_client):
            backend = RedisCacheBackend(key_prefix="uat:")
        backend.setex("k", 60, "v")
        assert fake_client.get("uat:k") == "v"

    def test_overwrites_existing_value(self, backend):
        backend.setex("k", 60, "old")
        backend.setex("k", 60, "new")
        assert backend.get("k") == "new"


class TestDelete:
    def test_removes_existing_key(self, backend):
        backend.setex("del_me", 60, "val")
        backend.delete("del_me")
        assert backend.get("del_me") is None

    def test_noop_on_missing_key(self, backend):
        backend.delete("never_existed")


class TestErrorWrapping:
    def test_get_wraps_redis_error(self):
        b = RedisCacheBackend.__new__(RedisCacheBackend)
        b._prefix = "seaquote:"
        b._client = None
        with pytest.raises(CacheError):
            b.get("k")

    def test_setex_wraps_connection_error(self, backend, fake_server):
        fake_server.connected = False
        with pytest.raises(CacheError, match="SETEX"):
            backend.setex("k", 60, "v")
