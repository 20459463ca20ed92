"""
Filtros y órdenes para la colección, en el formato `where`/`order` de
Prisma. Los dos stores (Prisma y memoria) interpretan este mismo formato.
"""

from typing import Any, Dict

from computacion.core.validators import CAMPOS, Producto

ORDER_BY_CODE_DESC = {"codigo": "desc"}


def all_products() -> Dict[str, Any]:
    return {}


def by_code(codigo: int) -> Dict[str, Any]:
    return {"codigo": codigo}


def by_name(nombre: str) -> Dict[str, Any]:
    # subcadena, sin distinguir mayúsculas; el texto nunca se usa como regex
    return {"nombre": {"contains": nombre, "mode": "insensitive"}}


def by_category(categoria: str) -> Dict[str, Any]:
    # coincidencia exacta: "Monitores" no trae "Monitores LED"
    return {"categoria": {"equals": categoria, "mode": "insensitive"}}


def by_min_price(precio: float) -> Dict[str, Any]:
    return {"precio": {"gte": precio}}


def price_update(precio: float) -> Dict[str, Any]:
    return {"precio": precio}


def replacement(producto: Producto) -> Dict[str, Any]:
    return producto.model_dump(include=set(CAMPOS))
