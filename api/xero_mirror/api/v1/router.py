"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from xero_mirror.api.v1.endpoints import mirror, sync


# Router principal de la API v1
api_router = APIRouter(prefix="/v1")

# Incluir routers de endpoints especificos
api_router.include_router(sync.router)
for collection_router in mirror.routers:
    api_router.include_router(collection_router)
