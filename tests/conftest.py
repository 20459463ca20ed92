import pytest
from fastapi.testclient import TestClient

from computacion.db.memory import MemoryStore
from computacion.main import create_app

PRODUCTOS = [
    {"codigo": 1, "nombre": "Notebook Lenovo IdeaPad", "precio": 450000.0, "categoria": "Notebooks"},
    {"codigo": 5, "nombre": "Mouse inalámbrico Logitech", "precio": 15000.0, "categoria": "Accesorios"},
    {"codigo": 3, "nombre": "Monitor Samsung 24", "precio": 120000.0, "categoria": "Monitores"},
    {"codigo": 7, "nombre": "Monitor LG UltraGear", "precio": 210000.0, "categoria": "Monitores LED"},
    {"codigo": 2, "nombre": "Teclado mecánico Redragon", "precio": 35000.0, "categoria": "accesorios"},
]


@pytest.fixture
def store():
    """Store en memoria con algunos productos cargados."""
    return MemoryStore(PRODUCTOS)


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c
