"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import (
    SyncResultDTO,
    SyncErrorDTO,
    EntitySyncStatusDTO,
    SyncStatusResponseDTO,
)
from .mirror_dto import (
    MirrorResponseDTO,
    BankDetailDTO,
    BankDetailsResponseDTO,
)

__all__ = [
    "SyncResultDTO",
    "SyncErrorDTO",
    "EntitySyncStatusDTO",
    "SyncStatusResponseDTO",
    "MirrorResponseDTO",
    "BankDetailDTO",
    "BankDetailsResponseDTO",
]
