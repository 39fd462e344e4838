"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from sikap.infrastructure or sikap.api.
"""

from sikap.application.interfaces.repositories import (
    IActivityLogRepository,
    IApplicationRepository,
    IDocumentRepository,
    IUserRepository,
)
from sikap.application.interfaces.services import (
    IActivityLogService,
    IContentScanner,
)
from sikap.application.interfaces.storage import IStorageService

__all__ = [
    "IActivityLogRepository",
    "IActivityLogService",
    "IApplicationRepository",
    "IContentScanner",
    "IDocumentRepository",
    "IStorageService",
    "IUserRepository",
]
