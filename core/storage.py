# --------------------------------------------------------------
# File: storage.py
# Description: Persistencia JSON con escritura atómica para usuarios y mensajes.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para el almacenamiento local."""

from __future__ import annotations

import copy
import json
import os
import threading
from typing import Any, Dict, Optional

__all__ = ["load_db", "save_db", "db_lock"]

# Serializa los ciclos leer-modificar-escribir dentro del proceso.
db_lock = threading.RLock()


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def load_db(path: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Carga un archivo JSON o devuelve una copia de la estructura por defecto.

    Args:
        path (str): Ruta del archivo JSON.
        default (Optional[Dict[str, Any]]): Estructura vacía si el archivo no es
            accesible o está corrupto.

    Returns:
        Dict[str, Any]: Contenido cargado o la base vacía.

    """

    try:
        with open(path, "r", encoding="utf-8") as handler:
            return json.load(handler)
    except (FileNotFoundError, json.JSONDecodeError):
        return copy.deepcopy(default) if default is not None else {}


def save_db(db: Dict[str, Any], path: str) -> None:
    """Guarda la base de datos JSON aplicando escritura atómica."""

    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handler:
        json.dump(db, handler, indent=2, ensure_ascii=False)
    os.replace(tmp_path, path)
