import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from .config import get_settings
from .contract import metadata

logger = logging.getLogger(__name__)


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url


class PetDatabase:
    """
    Handle del almacén relacional. El engine se abre en el primer uso
    y se reutiliza después; close() lo libera.
    """

    def __init__(self, url: str):
        self.url = url
        self._engine: Engine | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> Engine:
        if self._engine is None:
            kwargs = {}
            if self.url.startswith("sqlite"):
                # FastAPI ejecuta los endpoints síncronos en un threadpool
                kwargs["connect_args"] = {"check_same_thread": False}
                if _is_memory_url(self.url):
                    # una sola conexión compartida, si no cada conexión ve una BD vacía
                    kwargs["poolclass"] = StaticPool
            self._engine = create_engine(self.url, **kwargs)
            # Create the table you need
            metadata.create_all(self._engine)
            logger.info(f"Opened pet database at {self.url}")
        return self._engine

    @property
    def engine(self) -> Engine:
        return self.open()

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


_database: PetDatabase | None = None

def get_database() -> PetDatabase:
    global _database
    if _database is None:
        _database = PetDatabase(get_settings().database_url)
    return _database
