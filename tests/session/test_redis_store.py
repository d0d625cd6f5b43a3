# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for RedisPoolStore using a FakeRedis stub."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import msgpack
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from redis_pool_store.kernel.exceptions import (
    BackendException,
    DecodeException,
    EncodeException,
    SessionStoreException,
)
from redis_pool_store.kernel.types import ErrorKind
from redis_pool_store.session.adapters.redis import RedisPoolStore, RedisStoreError, session_key
from redis_pool_store.session.codec import encode_record
from redis_pool_store.session.ports.outbound import SessionStore
from redis_pool_store.session.record import SessionRecord


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface.

    Records every command so tests can assert on the literal arguments.
    Expiry is not simulated.
    """

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.expirations: dict[str, int] = {}
        self.commands: list[tuple] = []

    async def get(self, key: str) -> bytes | None:
        self.commands.append(("GET", key))
        return self._store.get(key)

    async def set(self, key: str, value: bytes, ex: int | None = None, exat: int | None = None) -> bool:
        self.commands.append(("SET", key, value, "EXAT", exat))
        self._store[key] = value
        if exat is not None:
            self.expirations[key] = exat
        return True

    async def delete(self, *keys: str) -> int:
        self.commands.append(("DEL", *keys))
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                self.expirations.pop(k, None)
                count += 1
        return count


class BrokenRedis:
    """Stub whose every command fails like a dropped connection."""

    async def get(self, key: str) -> bytes | None:
        raise RedisConnectionError("Connection refused")

    async def set(self, key: str, value: bytes, ex: int | None = None, exat: int | None = None) -> bool:
        raise RedisConnectionError("Connection refused")

    async def delete(self, *keys: str) -> int:
        raise RedisConnectionError("Connection refused")


def _record(session_id: str = "abc", expiry: int = 1_700_000_000, **data) -> SessionRecord:
    return SessionRecord(
        id=session_id,
        data=data or {"user_id": 42},
        expiry_date=datetime.fromtimestamp(expiry, tz=timezone.utc),
    )


class TestSessionKey:
    def test_prefixes_session_id(self):
        assert session_key("abc") == "tower_session:abc"

    def test_keeps_id_verbatim(self):
        assert session_key("a:b/c") == "tower_session:a:b/c"


class TestRedisPoolStore:
    @pytest.mark.asyncio
    async def test_protocol_compliance(self):
        """RedisPoolStore satisfies the SessionStore protocol."""
        store: SessionStore = RedisPoolStore(FakeRedis())
        assert isinstance(store, SessionStore)

    @pytest.mark.asyncio
    async def test_save_then_load(self):
        store = RedisPoolStore(FakeRedis())
        record = _record(cart=[{"sku": "A-1", "qty": 2}], user={"name": "Alice", "roles": ["admin"]})
        await store.save(record)
        assert await store.load("abc") == record

    @pytest.mark.asyncio
    async def test_load_returns_new_record(self):
        store = RedisPoolStore(FakeRedis())
        record = _record()
        await store.save(record)
        loaded = await store.load("abc")
        assert loaded is not record

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self):
        store = RedisPoolStore(FakeRedis())
        assert await store.load("never-saved") is None

    @pytest.mark.asyncio
    async def test_delete_removes_session(self):
        store = RedisPoolStore(FakeRedis())
        await store.save(_record())
        await store.delete("abc")
        assert await store.load("abc") is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        store = RedisPoolStore(FakeRedis())
        await store.delete("abc")
        await store.delete("abc")

    @pytest.mark.asyncio
    async def test_overwrite_replaces_value_and_expiry(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        first = _record(expiry=1_700_000_000, step=1)
        second = _record(expiry=1_700_000_600, step=2)
        await store.save(first)
        await store.save(second)
        assert await store.load("abc") == second
        assert fake.expirations["tower_session:abc"] == 1_700_000_600

    @pytest.mark.asyncio
    async def test_save_issues_single_set_with_absolute_expiry(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        record = _record()
        await store.save(record)
        assert fake.commands == [("SET", "tower_session:abc", encode_record(record), "EXAT", 1_700_000_000)]

    @pytest.mark.asyncio
    async def test_save_floors_sub_second_expiry(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        expiry = datetime.fromtimestamp(1_700_000_000, tz=timezone.utc) + timedelta(milliseconds=750)
        await store.save(SessionRecord(id="abc", data={}, expiry_date=expiry))
        assert fake.expirations["tower_session:abc"] == 1_700_000_000

    @pytest.mark.asyncio
    async def test_save_passes_past_expiry_through(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        await store.save(_record(expiry=10))
        assert fake.expirations["tower_session:abc"] == 10

    @pytest.mark.asyncio
    async def test_load_and_delete_use_prefixed_key(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        await store.load("xyz")
        await store.delete("xyz")
        assert fake.commands == [("GET", "tower_session:xyz"), ("DEL", "tower_session:xyz")]

    def test_repr_hides_client(self):
        fake = FakeRedis()
        assert repr(RedisPoolStore(fake)) == "RedisPoolStore(client=<redis connection pool>)"


class TestRedisPoolStoreErrors:
    @pytest.mark.asyncio
    async def test_garbage_bytes_raise_decode_error(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        await fake.set(session_key("abc"), b"\xc1 definitely not msgpack")
        with pytest.raises(DecodeException) as exc_info:
            await store.load("abc")
        assert exc_info.value.code == "SESSION_DECODE"
        assert exc_info.value.context == {"session_id": "abc", "key": "tower_session:abc"}

    @pytest.mark.asyncio
    async def test_foreign_msgpack_raises_decode_error(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        await fake.set(session_key("abc"), msgpack.packb({"hello": "world"}))
        with pytest.raises(DecodeException):
            await store.load("abc")

    @pytest.mark.asyncio
    async def test_unencodable_data_raises_encode_error(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        with pytest.raises(EncodeException) as exc_info:
            await store.save(_record(handler=object()))
        assert exc_info.value.kind is ErrorKind.ENCODE
        assert fake.commands == []

    @pytest.mark.asyncio
    async def test_tuple_map_key_raises_encode_error_before_set(self):
        fake = FakeRedis()
        store = RedisPoolStore(fake)
        with pytest.raises(EncodeException):
            await store.save(_record(grid={(0, 0): "start"}))
        assert fake.commands == []
        assert await store.load("abc") is None

    @pytest.mark.asyncio
    async def test_naive_expiry_raises_encode_error(self):
        store = RedisPoolStore(FakeRedis())
        record = SessionRecord(id="abc", data={}, expiry_date=datetime(2030, 1, 1))
        with pytest.raises(EncodeException):
            await store.save(record)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["save", "load", "delete"])
    async def test_connection_failure_raises_backend_error(self, operation: str):
        store = RedisPoolStore(BrokenRedis())
        argument = _record() if operation == "save" else "abc"
        with pytest.raises(BackendException) as exc_info:
            await getattr(store, operation)(argument)
        assert str(exc_info.value) == "Connection refused"
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    @pytest.mark.asyncio
    async def test_server_error_reply_raises_backend_error(self):
        fake = FakeRedis()

        async def rejecting_set(key: str, value: bytes, ex: int | None = None, exat: int | None = None) -> bool:
            raise ResponseError("invalid expire time in 'set' command")

        fake.set = rejecting_set  # type: ignore[assignment]
        store = RedisPoolStore(fake)
        with pytest.raises(BackendException, match="invalid expire time"):
            await store.save(_record(expiry=-5))

    @pytest.mark.asyncio
    async def test_non_redis_errors_propagate_unchanged(self):
        fake = FakeRedis()

        async def exploding_get(key: str) -> bytes | None:
            raise RuntimeError("bug")

        fake.get = exploding_get  # type: ignore[assignment]
        store = RedisPoolStore(fake)
        with pytest.raises(RuntimeError):
            await store.load("abc")


class TestRedisStoreError:
    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (ErrorKind.BACKEND, BackendException),
            (ErrorKind.DECODE, DecodeException),
            (ErrorKind.ENCODE, EncodeException),
        ],
    )
    def test_every_kind_maps_to_one_portable_exception(self, kind: ErrorKind, expected: type):
        err = RedisStoreError(kind, ValueError("boom"))
        converted = err.into_session_store_error({"key": "tower_session:abc"})
        assert type(converted) is expected
        assert isinstance(converted, SessionStoreException)
        assert str(converted) == "boom"
        assert converted.kind is kind
        assert converted.context == {"key": "tower_session:abc"}
