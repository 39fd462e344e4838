"""Domain enumerations: upload categories and activity actions."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UploadCategory(_ValuesMixin, str, Enum):
    """What an upload is for; drives branching and the storage subdirectory."""

    APPLICATION = "application"
    LEGAL_DOCUMENT = "legal-document"
    SOP_DOCUMENT = "sop-document"


class ActivityAction(_ValuesMixin, str, Enum):
    """Action recorded in the activity log."""

    UPLOAD = "UPLOAD"
    DOWNLOAD = "DOWNLOAD"
