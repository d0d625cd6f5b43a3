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
"""MessagePack codec for session records.

Records are stored as a map of ``id``, ``data`` and ``expiry_date``. The
expiry uses the MessagePack Timestamp extension type so sub-second
precision survives a round trip.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import msgpack
from msgpack.exceptions import UnpackException

from redis_pool_store.session.record import SessionRecord

_FIELDS = ("id", "data", "expiry_date")


class CodecError(ValueError):
    """Base class for codec failures."""


class RecordEncodeError(CodecError):
    """The record contains values MessagePack cannot represent."""


class RecordDecodeError(CodecError):
    """The bytes are not a MessagePack-encoded session record."""


# Map keys come back from msgpack as they were encoded, except arrays,
# which decode as unhashable lists.
_UNHASHABLE_ON_DECODE = (list, tuple, dict)


def _check_map_keys(value: Any, path: str) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if isinstance(key, _UNHASHABLE_ON_DECODE):
                raise RecordEncodeError(f"map key {key!r} at {path} cannot be decoded back into a map key")
            _check_map_keys(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_map_keys(item, f"{path}[{index}]")


def encode_record(record: SessionRecord) -> bytes:
    payload = {
        "id": record.id,
        "data": record.data,
        "expiry_date": record.expiry_date,
    }
    try:
        _check_map_keys(record.data, "data")
        return msgpack.packb(payload, use_bin_type=True, datetime=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise RecordEncodeError(f"cannot encode session {record.id!r}: {exc}") from exc


def decode_record(raw: bytes) -> SessionRecord:
    try:
        payload: Any = msgpack.unpackb(raw, raw=False, timestamp=3, strict_map_key=False)
    except (ValueError, TypeError, OverflowError, UnpackException) as exc:
        raise RecordDecodeError(f"malformed session payload: {exc}") from exc

    if not isinstance(payload, dict) or set(payload) != set(_FIELDS):
        raise RecordDecodeError("payload is not a session record")

    session_id, data, expiry_date = (payload[name] for name in _FIELDS)
    if not isinstance(session_id, str):
        raise RecordDecodeError("session id must be a string")
    if not isinstance(data, dict):
        raise RecordDecodeError("session data must be a map")
    if not isinstance(expiry_date, datetime):
        raise RecordDecodeError("session expiry must be a timestamp")

    return SessionRecord(id=session_id, data=data, expiry_date=expiry_date)
