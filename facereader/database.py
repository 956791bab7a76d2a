from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from typing import Optional
import logging

from .config import settings
from .models import ImageAnalysis

logger = logging.getLogger(__name__)

# Columns added after the first release; applied on every start if missing.
FORWARD_COLUMNS = [
    ("style_prompt", "TEXT"),
    ("style", "VARCHAR(50) DEFAULT 'mild'"),
    ("language", "VARCHAR(10) DEFAULT 'zh'"),
    ("analysis_type", "VARCHAR(20) DEFAULT 'normal'"),
    ("updated_at", "TIMESTAMP"),
]


def build_engine(db_url: str, ssl_mode: Optional[str] = None, echo: bool = False) -> Engine:
    engine_kwargs = {}

    if db_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        # Better resiliency for managed Postgres
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_recycle": 300,
            "pool_size": 5,
            "max_overflow": 10,
        })
        if ssl_mode:
            engine_kwargs["connect_args"] = {"sslmode": ssl_mode}

    return create_engine(db_url, echo=echo, **engine_kwargs)


engine: Optional[Engine] = (
    build_engine(settings.DATABASE_URL, settings.DATABASE_SSL_MODE, echo=settings.DEBUG)
    if settings.database_enabled
    else None
)


def create_db_and_tables(db_engine: Optional[Engine] = None) -> bool:
    """Create the analysis table and apply column additions. Returns False when no database is configured."""
    db_engine = db_engine if db_engine is not None else engine
    if db_engine is None:
        logger.info("DATABASE_URL not set; analysis records will not be persisted")
        return False
    SQLModel.metadata.create_all(db_engine)
    migrate_database(db_engine)
    return True


def migrate_database(db_engine: Engine) -> None:
    """Add forward-compatible columns to image_analyses if they don't exist."""
    table = ImageAnalysis.__tablename__
    existing = {col["name"] for col in inspect(db_engine).get_columns(table)}

    with db_engine.begin() as conn:
        for column_name, column_type in FORWARD_COLUMNS:
            if column_name in existing:
                continue
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column_name} {column_type}"))
            logger.info(f"Added column {column_name} to {table} table")


def get_session():
    if engine is None:
        yield None
        return
    with Session(engine) as session:
        yield session
