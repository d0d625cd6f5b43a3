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
"""Redis-backed session store."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from redis.exceptions import RedisError

from redis_pool_store.kernel.exceptions import (
    BackendException,
    DecodeException,
    EncodeException,
    SessionStoreException,
)
from redis_pool_store.kernel.types import ErrorKind
from redis_pool_store.session.codec import (
    RecordDecodeError,
    RecordEncodeError,
    decode_record,
    encode_record,
)
from redis_pool_store.session.record import SessionRecord

_logger = logging.getLogger(__name__)

_KEY_PREFIX = "tower_session:"

T = TypeVar("T")

_ERROR_MAPPING: dict[ErrorKind, type[SessionStoreException]] = {
    ErrorKind.BACKEND: BackendException,
    ErrorKind.DECODE: DecodeException,
    ErrorKind.ENCODE: EncodeException,
}


def session_key(session_id: str) -> str:
    """Return the Redis key that holds *session_id*."""
    return f"{_KEY_PREFIX}{session_id}"


class RedisStoreError(Exception):
    """Failure inside :class:`RedisPoolStore`, tagged with its kind."""

    def __init__(self, kind: ErrorKind, cause: Exception) -> None:
        super().__init__(str(cause))
        self.kind = kind
        self.cause = cause

    def into_session_store_error(self, context: dict | None = None) -> SessionStoreException:
        """Convert to the portable exception for this error's kind."""
        return _ERROR_MAPPING[self.kind](str(self.cause), context=context)


@contextmanager
def _translate_errors(session_id: str, key: str) -> Iterator[None]:
    try:
        yield
    except RedisStoreError as err:
        raise err.into_session_store_error({"session_id": session_id, "key": key}) from err.cause


async def _backend_call(awaitable: Awaitable[T]) -> T:
    try:
        return await awaitable
    except RedisError as exc:
        raise RedisStoreError(ErrorKind.BACKEND, exc) from exc


class RedisPoolStore:
    """Session store backed by a pooled ``redis.asyncio`` client.

    Records are MessagePack-encoded and stored under ``tower_session:<id>``.
    Expiration is set as an absolute Unix timestamp (``SET ... EXAT``) in the
    same command as the value, so a key never exists without its expiry.

    The client is shared: ``redis.asyncio.Redis`` checks out a pooled
    connection per command, and reconnects and timeouts are its concern.
    The store never opens or closes it.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client=<redis connection pool>)"

    async def save(self, record: SessionRecord) -> None:
        """Encode and store *record*, replacing any value and expiry for its id."""
        key = session_key(record.id)
        with _translate_errors(record.id, key):
            try:
                raw = encode_record(record)
            except RecordEncodeError as exc:
                raise RedisStoreError(ErrorKind.ENCODE, exc) from exc
            expire_at = record.expiry_timestamp
            _logger.debug("SET %s EXAT %d (%d bytes)", key, expire_at, len(raw))
            await _backend_call(self._client.set(key, raw, exat=expire_at))

    async def load(self, session_id: str) -> SessionRecord | None:
        """Fetch and decode a session. Returns ``None`` if the key is absent."""
        key = session_key(session_id)
        with _translate_errors(session_id, key):
            raw = await _backend_call(self._client.get(key))
            if raw is None:
                _logger.debug("GET %s: not found", key)
                return None
            try:
                return decode_record(raw)
            except RecordDecodeError as exc:
                _logger.warning("Stored session at '%s' could not be decoded: %s", key, exc)
                raise RedisStoreError(ErrorKind.DECODE, exc) from exc

    async def delete(self, session_id: str) -> None:
        """Remove a session. Deleting an absent session is not an error."""
        key = session_key(session_id)
        with _translate_errors(session_id, key):
            _logger.debug("DEL %s", key)
            await _backend_call(self._client.delete(key))
