from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from translator_api.core.config import Settings, settings

Base = declarative_base()


def build_engine(config: Settings = settings):
    url = config.DATABASE_URL
    if url.startswith("sqlite"):
        # SQLite: connection shared across FastAPI worker threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": config.DB_CONNECT_TIMEOUT},
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        connect_args={"connect_timeout": config.DB_CONNECT_TIMEOUT},
    )


def build_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# Process-wide defaults for callers outside an app (client.py)
engine = build_engine()
SessionLocal = build_session_factory(engine)


def init_db(bind=None):
    # models must be imported so their tables are registered on Base
    from translator_api import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db(request: Request):
    # each app carries the session factory built from its own Settings
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()
