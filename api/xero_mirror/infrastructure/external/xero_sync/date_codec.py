"""
Codec de fechas de Xero.

La API de Xero (JSON legacy) serializa timestamps como texto:

    "/Date(1627884000000+0000)/"

donde el numero es un epoch en milisegundos y el sufijo opcional es un offset
horario. El epoch ya es un instante absoluto (UTC), asi que el offset se
parsea pero NO desplaza el instante.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

XERO_DATE_RE = re.compile(r"^/Date\((?P<millis>\d+)(?P<offset>[+-]\d{4})?\)/$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def decode_xero_date(raw: Any) -> Optional[datetime]:
    """
    Parsea el formato /Date(<ms>[+-hhmm])/ a un datetime UTC aware.

    Retorna None (nunca levanta) si el valor es vacio, no es string o no
    matchea el patron: el caller debe tratar None como "desconocido".
    """
    if not raw or not isinstance(raw, str):
        return None

    match = XERO_DATE_RE.match(raw.strip())
    if not match:
        return None

    # Se usa timedelta para no depender del rango de fromtimestamp() de la plataforma
    return _EPOCH + timedelta(milliseconds=int(match.group("millis")))
