#!/usr/bin/env python
"""
Wrapper de Alembic para las tablas del espejo Xero.

Uso:
    python scripts/migrate.py upgrade          # Aplicar migraciones pendientes
    python scripts/migrate.py downgrade        # Revertir ultima migracion
    python scripts/migrate.py revision "desc"  # Crear nueva migracion (autogenerate)
    python scripts/migrate.py current          # Ver version actual
    python scripts/migrate.py history          # Ver historial de migraciones
"""
import subprocess
import sys
from pathlib import Path

from loguru import logger


# Directorio donde vive alembic.ini
API_DIR = Path(__file__).parent.parent

DEFAULT_TARGETS = {
    "upgrade": "head",
    "downgrade": "-1",
}


def run_alembic(args: list) -> int:
    """Ejecuta un comando de Alembic y retorna su codigo de salida."""
    cmd = ["alembic"] + args
    logger.info(f"Ejecutando: {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=API_DIR).returncode


def build_args(command: str, extra: list) -> list:
    """Traduce el comando del script a argumentos de Alembic."""
    if command in DEFAULT_TARGETS:
        return [command, extra[0] if extra else DEFAULT_TARGETS[command]]
    if command == "revision":
        if not extra:
            raise ValueError("Falta mensaje para la revision")
        return ["revision", "-m", extra[0], "--autogenerate"]
    if command == "current":
        return ["current"]
    if command == "history":
        return ["history", "--verbose"]
    raise ValueError(f"Comando desconocido: {command}")


def main():
    if len(sys.argv) < 2 or sys.argv[1] in ("help", "-h", "--help"):
        print(__doc__)
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    try:
        args = build_args(sys.argv[1].lower(), sys.argv[2:])
    except ValueError as e:
        logger.error(str(e))
        print(__doc__)
        sys.exit(1)

    sys.exit(run_alembic(args))


if __name__ == "__main__":
    main()
