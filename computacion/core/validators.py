"""
Validación de entrada para la colección "computacion".

Todo se valida antes de tocar la base de datos. Los errores se informan
con `ValidationError`, el primero que aparece en el orden
codigo, nombre, precio, categoria.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError

from computacion.core.errors import Issue, ValidationError

# Int de Prisma en MongoDB es de 32 bits
CODE_MIN = -(2 ** 31)
CODE_MAX = 2 ** 31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class Producto(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    codigo: int = Field(..., gt=0, le=CODE_MAX)
    nombre: str = Field(..., min_length=1)
    precio: float = Field(..., gt=0, allow_inf_nan=False)
    categoria: str = Field(..., min_length=1)

    @field_validator("codigo", "precio", mode="before")
    @classmethod
    def _plain_number(cls, v, info):
        if isinstance(v, bool):
            raise ValueError("debe ser numérico")
        if isinstance(v, str) and not (_INT_RE if info.field_name == "codigo" else _FLOAT_RE).fullmatch(v.strip()):
            raise ValueError("debe ser numérico")
        return v


CAMPOS: Tuple[str, ...] = tuple(Producto.model_fields)

CREATE_MSGS = {
    Issue.MALFORMED_BODY: "Error en el formato de datos a crear",
    Issue.INVALID_CODE: "Código de producto inválido",
    Issue.MISSING_NAME: "Le falta enviar el nombre del producto",
    Issue.MISSING_PRICE: "Le falta enviar el precio del producto",
    Issue.INVALID_PRICE: "El precio del producto debe ser un número mayor a 0",
    Issue.MISSING_CATEGORY: "Le falta enviar la categoria del producto",
}

REPLACE_MSGS = {
    Issue.MALFORMED_BODY: "Error en el formato de datos enviados",
    Issue.MISSING_CODE: "Le falta enviar el código del producto para modificar",
    Issue.INVALID_CODE: "El código de producto es inválido",
    Issue.MISSING_NAME: "Le falta enviar el nombre del producto para modificar",
    Issue.MISSING_PRICE: "Le falta enviar el precio del producto a modificar",
    Issue.INVALID_PRICE: "El precio del producto debe ser un número mayor a 0",
    Issue.MISSING_CATEGORY: "Le falta enviar la categoría del producto a modificar",
}

_MISSING_ISSUE = {
    "codigo": Issue.MISSING_CODE,
    "nombre": Issue.MISSING_NAME,
    "precio": Issue.MISSING_PRICE,
    "categoria": Issue.MISSING_CATEGORY,
}

_INVALID_ISSUE = {
    "codigo": Issue.INVALID_CODE,
    "nombre": Issue.MISSING_NAME,
    "precio": Issue.INVALID_PRICE,
    "categoria": Issue.MISSING_CATEGORY,
}

# en el alta un codigo ausente cuenta como codigo inválido
_CREATE_MISSING_ISSUE = {**_MISSING_ISSUE, "codigo": Issue.INVALID_CODE}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_allowed_fields(body: Dict[str, Any], allowed: Iterable[str] = CAMPOS) -> List[str]:
    allowed = set(allowed)
    return [campo for campo in body if campo not in allowed]


def _check_allowed(body: Any, msgs: Dict[Issue, str], allowed: Iterable[str] = CAMPOS) -> None:
    if not isinstance(body, dict):
        raise ValidationError(Issue.MALFORMED_BODY, msgs[Issue.MALFORMED_BODY])
    rechazados = validate_allowed_fields(body, allowed)
    if rechazados:
        raise ValidationError(
            Issue.DISALLOWED_FIELDS,
            f"Error, se enviaron campos que no están en la base de datos: {', '.join(rechazados)}",
            fields=rechazados,
        )


def _validate_product(body: Dict[str, Any], msgs: Dict[Issue, str], missing: Dict[str, Issue] = _MISSING_ISSUE) -> Producto:
    try:
        return Producto.model_validate(body)
    except SchemaError as exc:
        failed = {err["loc"][0] for err in exc.errors() if err["loc"]}
        for campo in CAMPOS:
            if campo not in failed:
                continue
            issue = missing[campo] if _is_blank(body.get(campo)) else _INVALID_ISSUE[campo]
            raise ValidationError(issue, msgs[issue]) from exc
        raise ValidationError(Issue.MALFORMED_BODY, msgs[Issue.MALFORMED_BODY]) from exc


def validate_create(body: Any) -> Producto:
    _check_allowed(body, CREATE_MSGS)
    return _validate_product(body, CREATE_MSGS, _CREATE_MISSING_ISSUE)


def validate_replace(body: Any, codigo: int) -> Producto:
    """Reemplazo completo: los cuatro campos son obligatorios y el codigo
    del cuerpo tiene que ser el mismo de la ruta (no se renombran productos)."""
    _check_allowed(body, REPLACE_MSGS)
    producto = _validate_product(body, REPLACE_MSGS)
    if producto.codigo != codigo:
        raise ValidationError(
            Issue.CODE_MISMATCH,
            f"El código enviado ({producto.codigo}) no coincide con el código del producto a modificar ({codigo})",
        )
    return producto


def parse_code(raw: Any, positive: bool = True) -> int:
    msg = "El código de producto es inválido" if positive else "El código del producto no es válido, debe ser numérico"
    if isinstance(raw, bool):
        raise ValidationError(Issue.INVALID_CODE, msg)
    if isinstance(raw, str):
        raw = raw.strip()
        # int() también acepta "1_000" y dígitos no ASCII
        if not _INT_RE.fullmatch(raw):
            raise ValidationError(Issue.INVALID_CODE, msg)
    try:
        codigo = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(Issue.INVALID_CODE, msg)
    if isinstance(raw, float) and raw != codigo:
        raise ValidationError(Issue.INVALID_CODE, msg)
    if positive and not 0 < codigo <= CODE_MAX:
        raise ValidationError(Issue.INVALID_CODE, msg)
    return codigo


def parse_price(raw: Any, positive: bool = True, msg: str = "Ingrese un precio válido para el producto") -> float:
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(Issue.INVALID_PRICE, msg)
    if isinstance(raw, str):
        raw = raw.strip()
        if not _FLOAT_RE.fullmatch(raw):
            raise ValidationError(Issue.INVALID_PRICE, msg)
    try:
        precio = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(Issue.INVALID_PRICE, msg)
    if not math.isfinite(precio) or (positive and precio <= 0):
        raise ValidationError(Issue.INVALID_PRICE, msg)
    return precio


def validate_price_patch(codigo: Any, precio: Any) -> Tuple[int, float]:
    return parse_code(codigo), parse_price(precio)


def validate_patch_body(body: Any) -> Any:
    """El PATCH solo admite {precio}; devuelve el valor crudo del precio."""
    _check_allowed(body, REPLACE_MSGS, allowed=("precio",))
    return body.get("precio")
