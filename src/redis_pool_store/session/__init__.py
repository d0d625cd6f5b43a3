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
"""Session persistence — records, the store protocol, and its Redis binding.

Import concrete store types from the adapter package::

    from redis_pool_store.session.adapters.memory import InMemorySessionStore
    from redis_pool_store.session.adapters.redis import RedisPoolStore
"""

from redis_pool_store.session.factory import create_session_store
from redis_pool_store.session.ports.outbound import SessionStore
from redis_pool_store.session.record import SessionRecord

__all__ = [
    "SessionRecord",
    "SessionStore",
    "create_session_store",
]
