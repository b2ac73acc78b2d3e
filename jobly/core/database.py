import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from jobly.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# $1, $2, ... positional placeholders
_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only makes sure the
    models are imported and registered on Base.metadata.
    Use "alembic upgrade head" to create/update database schema.
    """
    from jobly.models import company, job, user  # noqa: F401


def compile_positional(sql: str, dialect_name: str) -> str:
    """
    Rewrite PostgreSQL-style positional SQL for SQLAlchemy's text().

    $N becomes the named bind :pN. SQLite has no ILIKE, but its LIKE is
    already case-insensitive for ASCII, so the test database gets LIKE.
    """
    compiled = _PLACEHOLDER_RE.sub(r":p\1", sql)
    if dialect_name == "sqlite":
        compiled = compiled.replace(" ILIKE ", " LIKE ")
    return compiled


def query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute SQL with $1..$N placeholders bound positionally to values.

    Args:
        db: Database session
        sql: Statement text using $1, $2, ... placeholders
        values: Values aligned with the placeholders ($1 is values[0])

    Returns:
        Result rows as dicts keyed by column label (empty for statements
        without a result set)

    Raises:
        sqlalchemy.exc.SQLAlchemyError: Propagated unmodified on store failure
    """
    statement = text(compile_positional(sql, db.get_bind().dialect.name))
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    result = db.execute(statement, params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
