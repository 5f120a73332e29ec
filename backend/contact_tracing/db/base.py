from sqlalchemy.engine import Engine
from contact_tracing.models.base import Base


def _import_models() -> None:
    """Import all models so their metadata is registered on Base."""
    import contact_tracing.models.user          # noqa: F401
    import contact_tracing.models.interaction   # noqa: F401
    import contact_tracing.models.case          # noqa: F401
    import contact_tracing.models.notification  # noqa: F401


def create_all(engine: Engine) -> None:
    """Create all tables for the registered models (SYNC)."""
    _import_models()
    Base.metadata.create_all(bind=engine)
