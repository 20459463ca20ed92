import copy
from typing import Any, Iterable, List, Optional

from computacion.core.errors import ConflictError
from computacion.db.store import DeleteResult, Document, InsertResult, ProductStore, UpdateResult


def _fold(value: Any, insensitive: bool) -> Any:
    return value.casefold() if insensitive and isinstance(value, str) else value


def _match_field(value: Any, cond: Any) -> bool:
    if not isinstance(cond, dict):
        return value == cond
    insensitive = cond.get("mode") == "insensitive"
    for op, expected in cond.items():
        if op == "mode":
            continue
        if value is None:
            return False
        actual, expected = _fold(value, insensitive), _fold(expected, insensitive)
        if op == "equals":
            ok = actual == expected
        elif op == "contains":
            ok = isinstance(actual, str) and expected in actual
        elif op == "gte":
            ok = actual >= expected
        elif op == "gt":
            ok = actual > expected
        elif op == "lte":
            ok = actual <= expected
        elif op == "lt":
            ok = actual < expected
        else:
            raise ValueError(f"Operador no soportado: {op}")
        if not ok:
            return False
    return True


def matches(doc: Document, where: Document) -> bool:
    return all(_match_field(doc.get(campo), cond) for campo, cond in where.items())


class MemoryStore(ProductStore):
    """Store en memoria con la misma semántica que la colección real.
    Se usa en los tests y con STORE_BACKEND=memory."""

    def __init__(self, docs: Optional[Iterable[Document]] = None):
        super().__init__()
        self.docs: List[Document] = [dict(d) for d in docs or []]
        self.calls: List[str] = []

    async def find(self, where, order=None):
        self.calls.append("find")
        found = [copy.deepcopy(d) for d in self.docs if matches(d, where)]
        for campo, sentido in reversed(list((order or {}).items())):
            found.sort(key=lambda d: d.get(campo), reverse=sentido == "desc")
        return found

    async def find_one(self, where):
        self.calls.append("find_one")
        for d in self.docs:
            if matches(d, where):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, doc):
        self.calls.append("insert_one")
        if any(d.get("codigo") == doc.get("codigo") for d in self.docs):
            raise ConflictError(f"El código de producto {doc.get('codigo')}, ya existe")
        self.docs.append(dict(doc))
        return InsertResult(acknowledged=True)

    async def update_one(self, where, data):
        self.calls.append("update_one")
        for d in self.docs:
            if matches(d, where):
                changed = {k: v for k, v in data.items() if d.get(k) != v}
                d.update(changed)
                return UpdateResult(acknowledged=True, matched_count=1, modified_count=1 if changed else 0)
        return UpdateResult(acknowledged=True, matched_count=0, modified_count=0)

    async def delete_one(self, where):
        self.calls.append("delete_one")
        for i, d in enumerate(self.docs):
            if matches(d, where):
                del self.docs[i]
                return DeleteResult(acknowledged=True, deleted_count=1)
        return DeleteResult(acknowledged=True, deleted_count=0)
