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
"""In-memory session store with absolute expiry."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from redis_pool_store.kernel.exceptions import DecodeException, EncodeException
from redis_pool_store.session.codec import (
    RecordDecodeError,
    RecordEncodeError,
    decode_record,
    encode_record,
)
from redis_pool_store.session.record import SessionRecord


class InMemorySessionStore:
    """In-memory session store guarded by an asyncio.Lock.

    Records go through the same MessagePack codec as the Redis store, so the
    stored value is a snapshot the caller cannot mutate and encoding failures
    surface identically. Suitable for development, testing, and
    single-process applications.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[bytes, datetime]] = {}
        self._lock = asyncio.Lock()

    async def save(self, record: SessionRecord) -> None:
        """Store a snapshot of *record* until its ``expiry_date``."""
        try:
            raw = encode_record(record)
        except RecordEncodeError as exc:
            raise EncodeException(str(exc), context={"session_id": record.id}) from exc
        async with self._lock:
            self._store[record.id] = (raw, record.expiry_date)

    async def load(self, session_id: str) -> SessionRecord | None:
        """Return the session, or ``None`` if missing or expired."""
        async with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return None

            raw, expiry_date = entry
            if expiry_date <= datetime.now(timezone.utc):
                del self._store[session_id]
                return None

        try:
            return decode_record(raw)
        except RecordDecodeError as exc:
            raise DecodeException(str(exc), context={"session_id": session_id}) from exc

    async def delete(self, session_id: str) -> None:
        async with self._lock:
            self._store.pop(session_id, None)
