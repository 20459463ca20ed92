from typing import AsyncIterator

from fastapi import Request

from computacion.db.store import ProductStore


async def get_store(request: Request) -> AsyncIterator[ProductStore]:
    """
    Handle del store para un request. Se libera siempre al terminar,
    incluso si el handler lanzó una excepción.
    """
    store: ProductStore = request.app.state.store
    async with store.acquire() as handle:
        yield handle
