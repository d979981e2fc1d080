from __future__ import annotations

from typing import Protocol

from .model import EmailSettings


class SettingsRepository(Protocol):
    def get_email_settings(self) -> EmailSettings:
        raise NotImplementedError
