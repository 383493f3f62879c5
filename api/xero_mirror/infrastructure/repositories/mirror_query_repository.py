"""
Repositorio de lectura de las colecciones espejadas.
Usa la sesion del request (get_db), a diferencia del store del motor de sync.
"""
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xero_mirror.application.services.mirror_query_builder import build_mirror_query, get_query_spec
from xero_mirror.infrastructure.database.models import BankTransactionMirrorModel, get_mirror_model


class MirrorQueryRepository:
    """Consultas de solo lectura sobre los documentos espejados."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_documents(
        self,
        entity_type: str,
        params: Optional[Mapping[str, Optional[str]]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Lista los documentos de una coleccion aplicando sus filtros.
        """
        model = get_mirror_model(entity_type)
        stmt = build_mirror_query(model, get_query_spec(entity_type), params or {})
        result = await self.db.execute(stmt)
        return [row.document for row in result.scalars().all()]

    async def get_document(self, entity_type: str, remote_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un documento por su identificador remoto.
        """
        model = get_mirror_model(entity_type)
        result = await self.db.execute(select(model).where(model.remote_id == remote_id))
        row = result.scalars().first()
        return row.document if row else None

    async def list_bank_details(self) -> List[Dict[str, Any]]:
        """
        Cuentas bancarias unicas ({Name, AccountID}) referenciadas por las transacciones.

        Se descartan las que no tienen Name o AccountID. Ante AccountID repetido
        gana la ultima aparicion, manteniendo la posicion de la primera.
        """
        result = await self.db.execute(
            select(BankTransactionMirrorModel.document).order_by(BankTransactionMirrorModel.id)
        )
        unique: Dict[str, Dict[str, Any]] = {}
        for document in result.scalars().all():
            bank_account = (document or {}).get("BankAccount") or {}
            name = bank_account.get("Name")
            account_id = bank_account.get("AccountID")
            if name and account_id:
                unique[account_id] = {"Name": name, "AccountID": account_id}
        return list(unique.values())
