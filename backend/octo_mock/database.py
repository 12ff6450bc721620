from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings, settings


def build_engine(config: Settings) -> Engine:
    url = config.resolved_database_url
    if not url.startswith("sqlite"):
        return create_engine(url)

    # check_same_thread=False: FastAPI runs sync handlers in a thread pool
    kwargs = {"connect_args": {"check_same_thread": False}}
    if config.is_memory_database:
        # one shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def enable_sqlite_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    from .models import Base

    Base.metadata.create_all(bind=engine)


engine = build_engine(settings)
SessionLocal = build_sessionmaker(engine)
