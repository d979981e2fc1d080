from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailSettings:
    from_email: Optional[str] = None
    admin_email: Optional[str] = None
