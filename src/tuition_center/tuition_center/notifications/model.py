from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailMessage:
    from_email: str
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class SendResult:
    error: Optional[str] = None
    message_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.error
