"""
Utilidades para manejo de fechas y horas.
"""
from datetime import datetime, timezone
from typing import Optional


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def from_iso_string(iso_string: Optional[str]) -> Optional[datetime]:
        """
        Convierte un string ISO 8601 a datetime aware en UTC.

        Acepta fechas ("2024-01-31"), fechas con hora y el sufijo "Z".
        Los valores sin zona horaria se interpretan como UTC.

        Args:
            iso_string: String en formato ISO 8601

        Returns:
            Optional[datetime]: Objeto datetime o None si hay error
        """
        if not iso_string or not isinstance(iso_string, str):
            return None
        value = iso_string.strip()
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
