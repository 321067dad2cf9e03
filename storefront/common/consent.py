"""
Consent Flag

One persistent boolean-as-string flag that suppresses the cookie banner
once the visitor has accepted it.
"""

from .constants import CONSENT_KEY
from .storage import SessionStorage


class ConsentFlag:
    """Reads and sets the cookie-consent flag in persistent storage."""

    ACCEPTED = "true"

    def __init__(self, storage: SessionStorage, key: str = CONSENT_KEY):
        self.storage = storage
        self.key = key

    @classmethod
    def from_settings(cls, storage: SessionStorage, settings) -> "ConsentFlag":
        """Flag stored under the consent_key configured in catalog.yaml."""
        return cls(storage, settings.consent_key)

    def is_accepted(self) -> bool:
        return self.storage.get_item(self.key) == self.ACCEPTED

    def accept(self) -> None:
        self.storage.set_item(self.key, self.ACCEPTED)
