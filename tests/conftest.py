# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar almacenamiento e inicializar el motor.
# --------------------------------------------------------------

from typing import Iterator

import pytest

from core import engine


@pytest.fixture(scope="session", autouse=True)
def _providers() -> None:
    """Ejecuta la inicialización única de proveedores antes de cualquier prueba."""
    engine.init_providers()


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH en una carpeta temporal para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))

    yield
    # tmp_path se limpia automáticamente por pytest
