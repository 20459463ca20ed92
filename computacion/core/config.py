from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
import os

from dotenv import load_dotenv

# Variables desde .env (si existe); el entorno real tiene prioridad
load_dotenv()


def _split(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class Settings:
    """
    Configuración de la API resuelta desde el entorno.

    La URL de MongoDB (MONGODB_URLSTRING) la lee directamente el
    datasource de Prisma, por eso no aparece acá.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    store_backend: str = "prisma"   # prisma | memory
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@lru_cache
def get_settings() -> Settings:
    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        store_backend=os.getenv("STORE_BACKEND", "prisma").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split(os.getenv("CORS_ORIGINS", "*")),
    )
