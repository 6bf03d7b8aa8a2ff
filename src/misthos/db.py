from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .models import Base


def engine_options(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        # the API serves sync routes from a thread pool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def enable_sqlite_savepoints(engine: Engine) -> None:
    """
    pysqlite defers BEGIN on its own, which breaks SAVEPOINT. Hand
    transaction control back to SQLAlchemy.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(settings.database_url, **engine_options(settings.database_url))
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def init_db() -> None:
    """
    Create missing tables. Local development only, production schemas are
    managed by alembic.
    """
    Base.metadata.create_all(bind=engine)


def get_db():
    """
    FastAPI dependency. Routes commit explicitly.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Session:
    """
    Transaction for scripts: commit on success, roll back on any error.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
