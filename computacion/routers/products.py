from typing import Any

from fastapi import APIRouter, Body, Depends

from computacion.core import queries
from computacion.core.errors import ConflictError, NotFoundError, StoreError
from computacion.core.responses import ok
from computacion.core.validators import (
    CODE_MAX,
    CODE_MIN,
    Producto,
    parse_code,
    parse_price,
    validate_create,
    validate_patch_body,
    validate_price_patch,
    validate_replace,
)
from computacion.db.store import ProductStore, on_store_error
from computacion.dependencies import get_store

router = APIRouter()

# Las dependencias de validación van antes que get_store en cada handler:
# un request inválido no llega a tomar un handle del store.


def lookup_code(codigo: str) -> int:
    cod = parse_code(codigo, positive=False)
    if not CODE_MIN <= cod <= CODE_MAX:
        # fuera del rango que guarda la colección: no puede existir
        raise NotFoundError(f"El producto con código {cod} no existe")
    return cod


def path_code(codigo: str) -> int:
    return parse_code(codigo)


def min_price(precio: str) -> float:
    return parse_price(precio, positive=False, msg="El precio debe ser numérico")


def create_body(data: Any = Body(None)) -> Producto:
    return validate_create(data)


def replace_body(cod: int = Depends(path_code), data: Any = Body(None)) -> Producto:
    return validate_replace(data, cod)


def patch_body(codigo: str, data: Any = Body(None)):
    return validate_price_patch(codigo, validate_patch_body(data))


@router.get("")
@router.get("/", include_in_schema=False)
async def list_products(store: ProductStore = Depends(get_store)):
    with on_store_error("Error al obtener los productos de la base de datos"):
        productos = await store.find(queries.all_products(), order=queries.ORDER_BY_CODE_DESC)
    return ok("Productos obtenidos", productos)


@router.get("/codigo/{codigo}")
async def get_by_code(cod: int = Depends(lookup_code), store: ProductStore = Depends(get_store)):
    with on_store_error("Error al obtener el producto de la base de datos"):
        producto = await store.find_one(queries.by_code(cod))
    if not producto:
        raise NotFoundError(f"El producto con código {cod} no existe")
    return ok(f"Producto {cod} encontrado con éxito", producto)


@router.get("/nombre/{nombre}")
async def get_by_name(nombre: str, store: ProductStore = Depends(get_store)):
    with on_store_error("Error al obtener el/los producto/s de la base de datos"):
        productos = await store.find(queries.by_name(nombre.strip()))
    if not productos:
        raise NotFoundError("No se encontraron productos")
    return ok("Producto/s encontrado/s con éxito", productos)


@router.get("/precio/{precio}")
async def get_by_min_price(minimo: float = Depends(min_price), store: ProductStore = Depends(get_store)):
    with on_store_error("Error al obtener el producto de la base de datos"):
        productos = await store.find(queries.by_min_price(minimo))
    if not productos:
        raise NotFoundError("Producto no encontrado")
    return ok("Producto/s encontrado/s con éxito", productos)


@router.get("/categoria/{categoria}")
async def get_by_category(categoria: str, store: ProductStore = Depends(get_store)):
    with on_store_error("Error al obtener la categoría de la base de datos"):
        productos = await store.find(queries.by_category(categoria.strip()))
    if not productos:
        raise NotFoundError("Categoría no encontrada")
    return ok("Categoría encontrada con éxito", productos)


@router.post("")
@router.post("/", include_in_schema=False)
async def create_product(producto: Producto = Depends(create_body), store: ProductStore = Depends(get_store)):
    doc = queries.replacement(producto)
    duplicado = ConflictError(
        f"El código de producto {producto.codigo}, ya existe. No puede haber otro nuevo producto con el mismo código"
    )
    with on_store_error("Error al intentar agregar un nuevo producto"):
        if await store.find_one(queries.by_code(producto.codigo)):
            raise duplicado
        try:
            result = await store.insert_one(doc)
        except ConflictError as exc:
            # otro request insertó el mismo codigo entre la búsqueda y el alta
            raise duplicado from exc
    if not result.acknowledged:
        raise StoreError("No se pudo crear el nuevo producto")
    return ok("Nuevo producto creado con éxito", doc, status_code=201)


@router.put("/{codigo}")
async def replace_product(
    cod: int = Depends(path_code),
    producto: Producto = Depends(replace_body),
    store: ProductStore = Depends(get_store),
):
    doc = queries.replacement(producto)
    with on_store_error("Error al modificar el producto"):
        result = await store.update_one(queries.by_code(cod), doc)
    if not (result.acknowledged and result.matched_count == 1 and result.modified_count == 1):
        raise StoreError("No se pudo modificar el producto, intente nuevamente")
    return ok("Datos modificados con éxito", doc)


@router.patch("/{codigo}")
async def patch_price(cambio=Depends(patch_body), store: ProductStore = Depends(get_store)):
    cod, precio = cambio
    with on_store_error("Error al modificar el precio del producto"):
        result = await store.update_one(queries.by_code(cod), queries.price_update(precio))
    if result.matched_count == 0:
        raise NotFoundError(f"El producto solicitado con código {cod}, no existe")
    return ok("Precio modificado con éxito")


@router.delete("/{codigo}")
async def delete_product(cod: int = Depends(path_code), store: ProductStore = Depends(get_store)):
    with on_store_error("Error al eliminar el producto"):
        result = await store.delete_one(queries.by_code(cod))
    if result.deleted_count == 0:
        raise NotFoundError("No se encontró ningun producto con el código seleccionado")
    return ok("Producto eliminado con éxito")
