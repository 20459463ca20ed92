import logging

from computacion.core.errors import ConflictError, StoreError
from computacion.core.validators import CAMPOS
from computacion.db.store import DeleteResult, InsertResult, ProductStore, UpdateResult

logger = logging.getLogger(__name__)


def _to_doc(record):
    # el id interno de Mongo no sale de la API
    return {campo: getattr(record, campo) for campo in CAMPOS}


def _errors():
    # el paquete prisma solo expone el cliente una vez corrido `prisma generate`
    from prisma.errors import PrismaError, UniqueViolationError
    return PrismaError, UniqueViolationError


class PrismaStore(ProductStore):
    """Colección "computacion" en MongoDB a través de Prisma (ver schema.prisma)."""

    def __init__(self, client=None):
        super().__init__()
        self.client = client

    def _get_client(self):
        if self.client is None:
            from prisma import Prisma
            self.client = Prisma()
        return self.client

    async def connect(self):
        client = self._get_client()
        if client.is_connected():
            return
        try:
            await client.connect()
        except Exception as exc:
            logger.exception("Error al conectar con MongoDB")
            raise StoreError("Error al conectarse a la base de datos") from exc
        logger.info("Conectado a MongoDB")

    async def disconnect(self):
        if self.client is None or not self.client.is_connected():
            return
        try:
            await self.client.disconnect()
        except Exception:
            logger.exception("Error al desconectar de MongoDB")
            raise
        logger.info("Desconectado de MongoDB")

    async def _run(self, action, *args, **kwargs):
        PrismaError, UniqueViolationError = _errors()
        try:
            return await action(*args, **kwargs)
        except UniqueViolationError as exc:
            raise ConflictError("Ya existe un producto con ese código") from exc
        except PrismaError as exc:
            logger.exception(f"Error de Prisma en {action.__name__}")
            raise StoreError("Error en la base de datos") from exc

    async def find(self, where, order=None):
        productos = self.client.producto
        kwargs = {"where": where}
        if order:
            kwargs["order"] = order
        records = await self._run(productos.find_many, **kwargs)
        return [_to_doc(r) for r in records]

    async def find_one(self, where):
        record = await self._run(self.client.producto.find_first, where=where)
        return _to_doc(record) if record else None

    async def insert_one(self, doc):
        record = await self._run(self.client.producto.create, data=doc)
        return InsertResult(acknowledged=record is not None)

    async def update_one(self, where, data):
        productos = self.client.producto
        actual = await self._run(productos.find_first, where=where)
        if actual is None:
            return UpdateResult(acknowledged=True, matched_count=0, modified_count=0)
        changed = {k: v for k, v in data.items() if getattr(actual, k) != v}
        if not changed:
            return UpdateResult(acknowledged=True, matched_count=1, modified_count=0)
        record = await self._run(productos.update, where=where, data=changed)
        if record is None:
            # borrado entre la lectura y la escritura
            return UpdateResult(acknowledged=True, matched_count=0, modified_count=0)
        return UpdateResult(acknowledged=True, matched_count=1, modified_count=1)

    async def delete_one(self, where):
        record = await self._run(self.client.producto.delete, where=where)
        return DeleteResult(acknowledged=True, deleted_count=1 if record else 0)
