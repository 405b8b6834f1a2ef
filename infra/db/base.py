# infra/db/base.py
from __future__ import annotations
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(db_url: str) -> Engine:
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        # Make sure the directory holding the SQLite file exists
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    logger.info("Using database at: %s", url.render_as_string(hide_password=True))
    return create_engine(
        url,
        echo=False,
        future=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
