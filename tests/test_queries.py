import asyncio

from computacion.core import queries
from computacion.core.validators import Producto
from computacion.db.memory import MemoryStore, matches

DOCS = [
    {"codigo": 1, "nombre": "Monitor Samsung", "precio": 100.0, "categoria": "Monitores"},
    {"codigo": 2, "nombre": "monitor LG", "precio": 250.0, "categoria": "Monitores LED"},
    {"codigo": 3, "nombre": "Teclado", "precio": 40.0, "categoria": "MONITORES"},
]


def _find(where, order=None):
    return asyncio.run(MemoryStore(DOCS).find(where, order))


def test_builders_shape():
    assert queries.by_code(4) == {"codigo": 4}
    assert queries.by_min_price(9.5) == {"precio": {"gte": 9.5}}
    assert queries.ORDER_BY_CODE_DESC == {"codigo": "desc"}
    assert queries.by_name("mon")["nombre"]["mode"] == "insensitive"


def test_name_is_case_insensitive_substring():
    assert [d["codigo"] for d in _find(queries.by_name("MONITOR"))] == [1, 2]
    assert _find(queries.by_name("tor s"))[0]["codigo"] == 1


def test_name_does_not_interpret_regex():
    assert _find(queries.by_name("Mon.*")) == []


def test_category_is_exact_and_case_insensitive():
    codigos = [d["codigo"] for d in _find(queries.by_category("monitores"))]
    assert codigos == [1, 3]


def test_min_price_is_inclusive():
    assert [d["codigo"] for d in _find(queries.by_min_price(100))] == [1, 2]


def test_order_desc_by_code():
    assert [d["codigo"] for d in _find(queries.all_products(), queries.ORDER_BY_CODE_DESC)] == [3, 2, 1]


def test_replacement_has_only_product_fields():
    producto = Producto(codigo=8, nombre="Gabinete", precio=10, categoria="Gabinetes")
    assert queries.replacement(producto) == {"codigo": 8, "nombre": "Gabinete", "precio": 10.0, "categoria": "Gabinetes"}


def test_matches_plain_equality():
    assert matches(DOCS[0], {"codigo": 1})
    assert not matches(DOCS[0], {"codigo": 2})
