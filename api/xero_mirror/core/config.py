"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Configuracion del espejo Xero:
    - XERO_BASE_URL / XERO_TENANT_ID / XERO_BEARER_TOKEN: acceso a la API remota
    - SYNC_INTERVAL_SECONDS: periodo por defecto del timer de sincronizacion
    - SYNC_INTERVAL_<ENTIDAD>: override por tipo de entidad (p.ej. SYNC_INTERVAL_INVOICES)
    - DATABASE_URL se puede especificar completa o por componentes
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Xero Mirror")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)

    # Base de datos - Componentes separados (recomendado para flexibilidad)
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="xero_user")
    DATABASE_PASSWORD: str = Field(default="xero_pass")
    DATABASE_NAME: str = Field(default="xero_mirror")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # API de Xero
    XERO_BASE_URL: str = Field(default="https://api.xero.com/api.xro/2.0")
    XERO_TENANT_ID: str = Field(default="")
    XERO_BEARER_TOKEN: str = Field(default="")
    XERO_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Sincronizacion
    SYNC_ENABLED: bool = Field(default=True)
    SYNC_INTERVAL_SECONDS: float = Field(default=30.0, gt=0)
    SYNC_INTERVAL_ACCOUNTS: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_CONTACTS: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_INVOICES: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_PAYMENTS: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_PURCHASE_ORDERS: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_BANK_TRANSACTIONS: Optional[float] = Field(default=None, gt=0)
    SYNC_INTERVAL_USERS: Optional[float] = Field(default=None, gt=0)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    def sync_interval_for(self, entity_type: str) -> float:
        """
        Periodo del timer para un tipo de entidad.

        Usa SYNC_INTERVAL_<ENTIDAD> si esta definido; si no, SYNC_INTERVAL_SECONDS.
        Los valores no positivos se rechazan al cargar Settings.
        """
        override = getattr(self, f"SYNC_INTERVAL_{entity_type.upper()}", None)
        return float(override) if override is not None else self.SYNC_INTERVAL_SECONDS

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
