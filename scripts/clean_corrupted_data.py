#!/usr/bin/env python3
"""
Elimina los cuestionarios cuyas respuestas contienen "[object Object]" o no son
JSON válido, y repara la información personal del resto.
Ejecutar desde la raíz del repo:
    python scripts/clean_corrupted_data.py [--dry-run]
"""
import argparse
import json
import os
import sys

# Agregar la raíz del repo al path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.services.sweep import purge_corrupted_questionnaires


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Elimina cuestionarios con respuestas corruptas")
    parser.add_argument("--dry-run", action="store_true", help="Solo informa; no escribe en la BD")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    with SessionLocal() as db:
        report = purge_corrupted_questionnaires(db, dry_run=args.dry_run)

    print(json.dumps(report.as_dict(), ensure_ascii=False, indent=2))
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
