from __future__ import annotations

from typing import Protocol

from .model import EmailMessage, SendResult


class EmailTransport(Protocol):
    """Outbound email capability.

    Implementations report delivery problems either as ``SendResult(error=...)`` or by
    raising; callers treat both as a failed send.
    """

    def send(self, message: EmailMessage) -> SendResult:
        raise NotImplementedError
