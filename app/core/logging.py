# app/core/logging.py
"""Configuración central de logging.

Un único handler a stdout en el root logger para que todos los
``logging.getLogger(__name__)`` del proyecto salgan sin configuración por
módulo. No duplica handlers si uvicorn recarga la app.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Configura logging una sola vez (si el root ya tiene handlers, no hace nada)."""
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(_dict_config(level.upper()))
