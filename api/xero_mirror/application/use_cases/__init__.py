"""
Casos de uso de la aplicacion.
"""
from .sync_use_cases import SyncUseCases
from .mirror_query_use_cases import MirrorQueryUseCases

__all__ = ["SyncUseCases", "MirrorQueryUseCases"]
