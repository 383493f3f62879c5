"""
Casos de uso de lectura de las colecciones espejadas.
"""
from typing import Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from xero_mirror.application.dto.mirror_dto import BankDetailsResponseDTO, MirrorResponseDTO
from xero_mirror.application.services.mirror_query_builder import get_query_spec
from xero_mirror.infrastructure.repositories.mirror_query_repository import MirrorQueryRepository
from xero_mirror.shared.exceptions.domain import EntityNotFoundException

_COLLECTION_NAMES = {
    "accounts": "accounts",
    "contacts": "contacts",
    "invoices": "invoices",
    "payments": "payments",
    "purchase_orders": "purchase orders",
    "bank_transactions": "transactions",
    "users": "users",
}


class MirrorQueryUseCases:
    """Listados filtrados y detalle de documentos espejados."""

    def __init__(self, db: AsyncSession):
        self.repository = MirrorQueryRepository(db)

    async def list_collection(
        self,
        entity_type: str,
        params: Optional[Mapping[str, Optional[str]]] = None,
    ) -> MirrorResponseDTO:
        """
        Lista una coleccion espejada.

        Raises:
            ValidationException: Si una fecha es invalida (colecciones estrictas)
        """
        documents = await self.repository.list_documents(entity_type, params)
        return MirrorResponseDTO(
            data=documents,
            message=f"Se obtuvieron {len(documents)} {_COLLECTION_NAMES[entity_type]}",
        )

    async def get_detail(self, entity_type: str, remote_id: str) -> MirrorResponseDTO:
        """
        Obtiene un documento por identificador remoto.

        Raises:
            EntityNotFoundException: Si el documento no esta espejado
        """
        document = await self.repository.get_document(entity_type, remote_id)
        if document is None:
            raise EntityNotFoundException(get_query_spec(entity_type).label, remote_id)
        return MirrorResponseDTO(
            data=document,
            message=f"Detalle de {get_query_spec(entity_type).label.lower()} obtenido correctamente",
        )

    async def bank_details(self) -> BankDetailsResponseDTO:
        """Cuentas bancarias unicas referenciadas por las transacciones."""
        details = await self.repository.list_bank_details()
        return BankDetailsResponseDTO(
            data=details,
            message=f"Se obtuvieron {len(details)} cuenta(s) bancaria(s)",
        )
