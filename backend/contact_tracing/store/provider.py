# contact_tracing/store/provider.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from contact_tracing.core.config import Settings
from contact_tracing.db.base import create_all
from contact_tracing.db.session import make_engine, make_session_factory
from contact_tracing.store.base import Store
from contact_tracing.store.memory import MemoryStore
from contact_tracing.store.sql import SqlStore

logger = logging.getLogger(__name__)


class StoreProvider(Protocol):
    def prepare(self) -> None:
        """Create whatever the backend needs before serving (tables, ...)."""
        ...

    def session(self) -> ContextManager[Store]:
        ...


class SqlStoreProvider:
    def __init__(self, engine: Engine, session_factory: sessionmaker | None = None) -> None:
        self.engine = engine
        self.session_factory = session_factory or make_session_factory(engine)

    def prepare(self) -> None:
        create_all(self.engine)
        logger.info("[STORE] Using SQL store at %s", self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def session(self) -> Iterator[SqlStore]:
        db = self.session_factory()
        try:
            yield SqlStore(db)
        finally:
            db.close()


def build_store_provider(settings: Settings) -> StoreProvider:
    if settings.use_memory_store:
        return MemoryStore()
    return SqlStoreProvider(make_engine(settings.DATABASE_URL))
