from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from esms.core.config import settings


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine with per-backend connection settings."""
    url = make_url(database_url)
    backend = url.get_backend_name()
    kwargs: dict = {"echo": echo}
    connect_args: dict = {}

    if backend.startswith("postgresql"):
        connect_args["options"] = "-c timezone=utc"
        kwargs["pool_pre_ping"] = True
    elif backend == "sqlite":
        # get_db runs in the threadpool, async handlers use the session on the loop thread.
        connect_args["check_same_thread"] = False
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, connect_args=connect_args, **kwargs)
    if backend == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
