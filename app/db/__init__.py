from sqlalchemy import create_engine, event, MetaData
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from typing import Generator

from app.core.settings import DATABASE_URL

# Naming convention para que Alembic genere nombres estables y limpios
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Espera (ms) ante un lock de escritura: dos pasadas de alertas/badges del mismo agente
# pueden escribir a la vez y la segunda debe chocar con la unicidad, no con el lock.
SQLITE_BUSY_TIMEOUT_MS = 5000

def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")

def enable_sqlite_pragmas(eng: Engine) -> Engine:
    """
    SQLite trae las foreign keys apagadas: sin esto el ON DELETE CASCADE de
    checklist_items / badges / alerts hacia agents no se aplica.
    """
    @event.listens_for(eng, "connect")
    def _set_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
        cursor.close()

    return eng

_connect_args = {"check_same_thread": False} if is_sqlite(DATABASE_URL) else {}
engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
if is_sqlite(DATABASE_URL):
    enable_sqlite_pragmas(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))

def get_db() -> Generator[Session, None, None]:
    """Una sesión por request; el RecordStore de app.deps se construye encima."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

__all__ = ["Base", "engine", "SessionLocal", "get_db", "enable_sqlite_pragmas", "is_sqlite"]
