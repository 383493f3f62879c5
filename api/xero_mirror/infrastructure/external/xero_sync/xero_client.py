"""
Cliente minimo de la API de Xero (sin SDKs externos).

Alcance:
- requests (ejecutado en un thread para no bloquear el event loop)
- un unico GET por coleccion, sin paginacion: se asume que Xero devuelve la
  coleccion completa en una respuesta
- sin reintentos: cualquier fallo se propaga como FetchFailed con la causa
  encadenada; el siguiente tick del timer vuelve a intentar
- timeout explicito por fetch (requests + asyncio)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from xero_mirror.shared.exceptions.sync import FetchFailed

from .sync_config import EntityTypeConfig

# Margen extra sobre el timeout de requests para el timeout a nivel asyncio
ASYNC_TIMEOUT_GRACE_S = 5.0


@dataclass(frozen=True)
class XeroApiConfig:
    """
    Configuracion explicita de acceso a Xero.

    Se construye una vez (desde Settings) y se pasa al cliente: el cliente
    nunca lee variables de entorno.
    """

    base_url: str
    tenant_id: str
    bearer_token: str
    timeout_s: float = 30.0


class XeroClient:
    """
    Cliente HTTP de Xero. Expone `fetch` (async) que retorna el payload crudo.

    Importante:
    - No valida la forma del payload: eso lo decide el ciclo de sync.
    - No hace cast de tipos de campos: eso se decide en el normalizador.
    """

    def __init__(
        self,
        config: XeroApiConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.bearer_token}",
            "Xero-Tenant-ID": self._config.tenant_id,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def get_collection(self, collection_path: str) -> Any:
        """
        GET sincrono de una coleccion. Retorna el JSON decodificado.

        Raises:
            FetchFailed: error de transporte, status no 2xx o JSON invalido
        """
        url = f"{self._base_url}/{collection_path.lstrip('/')}"
        try:
            resp = self._session.get(url, headers=self._headers(), timeout=self._config.timeout_s)
        except requests.RequestException as e:
            raise FetchFailed(f"Error de transporte llamando a {url}: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise FetchFailed(
                f"Xero respondio {resp.status_code} para {collection_path}: {resp.text[:500]}",
                details={"http_status": resp.status_code},
            )

        try:
            return resp.json()
        except ValueError as e:
            raise FetchFailed(f"Respuesta no es JSON valido para {collection_path}") from e

    async def fetch(self, config: EntityTypeConfig) -> Any:
        """
        Obtiene la coleccion completa de un tipo de entidad.

        El GET corre en un thread separado; ademas del timeout de requests se
        aplica un timeout a nivel asyncio para que un fetch colgado nunca
        bloquee el ciclo indefinidamente.
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.get_collection, config.collection_path),
                timeout=self._config.timeout_s + ASYNC_TIMEOUT_GRACE_S,
            )
        except asyncio.TimeoutError as e:
            raise FetchFailed(
                f"Timeout ({self._config.timeout_s}s) obteniendo {config.collection_path}",
                entity_type=config.entity_type,
            ) from e
        except FetchFailed as e:
            e.entity_type = config.entity_type
            e.details["entity_type"] = config.entity_type
            raise
