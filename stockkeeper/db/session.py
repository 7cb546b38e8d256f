"""Database engine and session factory. PostgreSQL in production, SQLite locally."""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from stockkeeper.core.config import settings


def enable_sqlite_foreign_keys(engine):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # SQLite: Use NullPool for thread-safety
        from sqlalchemy.pool import NullPool
        return enable_sqlite_foreign_keys(
            create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=NullPool,
            )
        )

    connect_args = {}
    if settings.DATABASE_SSLMODE:
        connect_args["sslmode"] = settings.DATABASE_SSLMODE

    # PostgreSQL: QueuePool shared by all request threads
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,  # Verify connection health
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
