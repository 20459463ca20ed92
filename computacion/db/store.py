import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional

from computacion.core.errors import StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@dataclass
class InsertResult:
    acknowledged: bool


@dataclass
class UpdateResult:
    acknowledged: bool
    matched_count: int
    modified_count: int


@dataclass
class DeleteResult:
    acknowledged: bool
    deleted_count: int


class ProductStore(ABC):
    """
    Acceso a la colección de productos.

    Cada request toma un handle con `acquire()` y lo libera al salir,
    haya terminado bien, con error de negocio o con excepción.
    Los filtros son los que arma `computacion.core.queries`.
    """

    def __init__(self):
        self.active_handles = 0

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator["ProductStore"]:
        await self.connect()
        self.active_handles += 1
        try:
            yield self
        finally:
            self.active_handles -= 1
            logger.debug(f"Handle liberado, activos: {self.active_handles}")

    @abstractmethod
    async def find(self, where: Document, order: Optional[Document] = None) -> List[Document]: ...

    @abstractmethod
    async def find_one(self, where: Document) -> Optional[Document]: ...

    @abstractmethod
    async def insert_one(self, doc: Document) -> InsertResult: ...

    @abstractmethod
    async def update_one(self, where: Document, data: Document) -> UpdateResult: ...

    @abstractmethod
    async def delete_one(self, where: Document) -> DeleteResult: ...


@contextmanager
def on_store_error(msg: str) -> Iterator[None]:
    """Reetiqueta un StoreError con el mensaje de la operación en curso."""
    try:
        yield
    except StoreError as exc:
        raise StoreError(msg) from exc
