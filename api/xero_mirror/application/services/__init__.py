"""
Servicios de aplicacion.

Contiene la logica reutilizable que no pertenece
a un caso de uso especifico.
"""
from xero_mirror.application.services.mirror_query_builder import (
    QueryFilterSpec,
    QUERY_SPECS,
    build_mirror_query,
    get_query_spec,
)

__all__ = [
    # Consultas sobre el espejo
    "QueryFilterSpec",
    "QUERY_SPECS",
    "build_mirror_query",
    "get_query_spec",
]
