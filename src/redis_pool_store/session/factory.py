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
"""Builds the configured session store."""

from __future__ import annotations

import logging
from typing import Any

import redis.asyncio as aioredis

from redis_pool_store.config.properties import SessionStoreProperties
from redis_pool_store.core.config import Config
from redis_pool_store.logging import configure_logging
from redis_pool_store.session.adapters.memory import InMemorySessionStore
from redis_pool_store.session.adapters.redis import RedisPoolStore
from redis_pool_store.session.ports.outbound import SessionStore

_logger = logging.getLogger(__name__)

_DEFAULT_URL = "redis://localhost:6379/0"


def create_session_store(config: Config) -> SessionStore:
    """Create the store named by ``session.store`` (``redis`` or ``memory``).

    When a ``session.logging`` section is present, logging is configured
    through :func:`~redis_pool_store.logging.configure_logging` first.
    """
    if config.get_section("session.logging"):
        configure_logging(config)

    properties = config.bind(SessionStoreProperties)
    store_type = properties.store.lower()

    if store_type == "memory":
        _logger.info("Using in-memory session store")
        return InMemorySessionStore()

    if store_type != "redis":
        raise ValueError(f"Unknown session store '{properties.store}': expected 'redis' or 'memory'")

    # Per-key reads so SESSION_REDIS_* env vars and ${...} placeholders apply.
    url = str(config.get("session.redis.url", _DEFAULT_URL))
    options: dict[str, Any] = {}
    max_connections = config.get("session.redis.max_connections")
    if max_connections is not None:
        options["max_connections"] = int(max_connections)
    socket_timeout = config.get("session.redis.socket_timeout")
    if socket_timeout is not None:
        options["socket_timeout"] = float(socket_timeout)

    client = aioredis.from_url(url, decode_responses=False, **options)  # type: ignore[no-untyped-call,unused-ignore]
    _logger.info("Using Redis session store (max_connections=%s)", options.get("max_connections", "default"))
    return RedisPoolStore(client)
