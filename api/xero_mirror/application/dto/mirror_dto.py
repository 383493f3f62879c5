"""
DTOs de lectura de las colecciones espejadas.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class MirrorResponseDTO(BaseModel):
    """Envoltorio comun de las respuestas de lectura."""

    status: int = 200
    success: bool = True
    data: Union[List[Dict[str, Any]], Dict[str, Any], None] = Field(
        default=None,
        description="Documentos espejados (lista) o un documento (detalle)"
    )
    message: str


class BankDetailDTO(BaseModel):
    """Cuenta bancaria referenciada por las transacciones."""

    Name: str
    AccountID: str


class BankDetailsResponseDTO(BaseModel):
    """Listado de cuentas bancarias unicas."""

    status: int = 200
    success: bool = True
    data: List[BankDetailDTO]
    message: str
