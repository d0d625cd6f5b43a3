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
"""redis-pool-store — Redis session persistence with MessagePack records."""

from redis_pool_store.kernel import (
    BackendException,
    DecodeException,
    EncodeException,
    ErrorKind,
    SessionStoreException,
)
from redis_pool_store.logging import configure_logging
from redis_pool_store.session import SessionRecord, SessionStore, create_session_store
from redis_pool_store.session.adapters.memory import InMemorySessionStore
from redis_pool_store.session.adapters.redis import RedisPoolStore

__all__ = [
    "BackendException",
    "DecodeException",
    "EncodeException",
    "ErrorKind",
    "InMemorySessionStore",
    "RedisPoolStore",
    "SessionRecord",
    "SessionStore",
    "SessionStoreException",
    "configure_logging",
    "create_session_store",
]
