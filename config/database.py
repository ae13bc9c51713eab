import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """
    Explicit storage handle: one engine and session factory per process.

    Opened at application start-up (see ``main.lifespan``) and disposed at
    shutdown. Registry and ledger services receive sessions produced here
    instead of reaching for module-level globals.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 30,
        pool_recycle: int = 3600,
        timeout_seconds: int = 30,
    ):
        self.url = url
        if url.startswith("sqlite"):
            options = {
                "connect_args": {"check_same_thread": False, "timeout": timeout_seconds},
            }
            if _is_memory_sqlite(url):
                # a single shared connection, otherwise every checkout sees an empty database
                options["poolclass"] = StaticPool
        else:
            options = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": pool_recycle,
                "pool_timeout": timeout_seconds,
                "connect_args": {"options": "-c timezone=utc"} if "postgresql" in url else {},
            }
        self.engine = create_engine(url, echo=echo, **options)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            timeout_seconds=settings.DB_TIMEOUT_SECONDS,
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        # models must be imported so their tables are registered on Base.metadata
        import api.sessions.sessions_model  # noqa: F401
        import api.attendance.attendance_records_model  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
