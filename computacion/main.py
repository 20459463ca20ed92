"""
API REST de la colección "computacion".

Uso:
    uvicorn computacion.main:app --port 3000
    python -m computacion
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from computacion.core.config import get_settings
from computacion.core.errors import ApiError, StoreError
from computacion.core.responses import EnvelopeResponse, fail, ok
from computacion.db.client import PrismaStore
from computacion.db.memory import MemoryStore
from computacion.db.store import ProductStore
from computacion.routers import products

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

RUTA_INVALIDA = "Ruta inválida o inexistente, compruebe nuevamente"


def build_store(backend: str) -> ProductStore:
    if backend == "memory":
        return MemoryStore()
    if backend == "prisma":
        return PrismaStore()
    raise ValueError(f"STORE_BACKEND desconocido: {backend}")


def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    app = FastAPI(
        title="Computación - Productos",
        default_response_class=EnvelopeResponse,
        redirect_slashes=False,
    )
    app.state.store = store or build_store(settings.store_backend)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup():
        logger.info(f"Iniciando API con store {type(app.state.store).__name__}")
        try:
            await app.state.store.connect()
        except StoreError:
            # la API arranca igual; acquire() reintenta la conexión en cada request
            logger.exception("No se pudo conectar al store al iniciar")

    @app.on_event("shutdown")
    async def shutdown():
        await app.state.store.disconnect()

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.msg}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.msg}")
        return fail(exc.msg, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return fail(RUTA_INVALIDA, 404)
        return fail(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
        return fail("Error en el formato de datos enviados", 400)

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception(f"Error no controlado en {request.method} {request.url.path}")
        return fail("Error interno del servidor", 500)

    @app.get("/")
    async def root():
        return ok("Página principal")

    app.include_router(products.router, prefix="/computacion", tags=["Computación"])
    return app


app = create_app()
