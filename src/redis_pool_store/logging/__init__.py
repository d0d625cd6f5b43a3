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
"""Logging — structlog-backed configuration for the session store."""

from __future__ import annotations

from redis_pool_store.core.config import Config
from redis_pool_store.logging.port import LoggingPort
from redis_pool_store.logging.structlog_adapter import StructlogAdapter


def configure_logging(config: Config, adapter: LoggingPort | None = None) -> LoggingPort:
    """Apply ``session.logging`` settings and return the configured port.

    Usage:
        configure_logging(Config.from_file("session.yaml"))
    """
    port = adapter if adapter is not None else StructlogAdapter()
    port.configure(config)
    return port


__all__ = ["LoggingPort", "StructlogAdapter", "configure_logging"]
