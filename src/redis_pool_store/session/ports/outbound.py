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
"""Session store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from redis_pool_store.session.record import SessionRecord


@runtime_checkable
class SessionStore(Protocol):
    """Abstract session persistence interface.

    All session backends (Redis, in-memory, etc.) must implement this protocol.
    Failures are raised as :class:`~redis_pool_store.kernel.SessionStoreException`
    subclasses.
    """

    async def save(self, record: SessionRecord) -> None: ...

    async def load(self, session_id: str) -> SessionRecord | None: ...

    async def delete(self, session_id: str) -> None: ...
