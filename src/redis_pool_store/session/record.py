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
"""SessionRecord — the unit of session persistence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class SessionRecord:
    """One persisted session.

    Attributes:
        id: Opaque session identifier, generated by the owning framework.
        data: Session-scoped state. Values must be MessagePack-serializable.
        expiry_date: Absolute, timezone-aware instant after which the record
            is no longer valid.
    """

    id: str
    data: dict[str, Any]
    expiry_date: datetime

    @property
    def expiry_timestamp(self) -> int:
        """Expiry as whole seconds since the Unix epoch."""
        return math.floor(self.expiry_date.timestamp())

    def is_expired(self, now: datetime | None = None) -> bool:
        current = now if now is not None else datetime.now(timezone.utc)
        return self.expiry_date <= current
