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
"""Portable session store exception hierarchy.

Every store implementation reports failures through these types so the
owning session framework can handle them without knowing which backend
produced them.
"""

from __future__ import annotations

from redis_pool_store.kernel.types import ErrorKind


class SessionStoreException(Exception):
    """Base exception for all session store errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_BACKEND").
        context: Arbitrary key-value pairs such as the session id or backend key.
    """

    kind: ErrorKind | None = None
    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


class BackendException(SessionStoreException):
    """Communication with the backend failed or a command was rejected."""

    kind = ErrorKind.BACKEND
    default_code = "SESSION_BACKEND"


class DecodeException(SessionStoreException):
    """Stored bytes could not be decoded into a session record."""

    kind = ErrorKind.DECODE
    default_code = "SESSION_DECODE"


class EncodeException(SessionStoreException):
    """A session record could not be serialized."""

    kind = ErrorKind.ENCODE
    default_code = "SESSION_ENCODE"
