# db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from formdesk.app.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
LocalSession = sessionmaker(autoflush=False, bind=engine)


def enable_sqlite_fk(engine):
    """ON DELETE CASCADE only works in SQLite with the pragma switched on."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_fk(engine)


def get_db():
    db = LocalSession()
    try:
        yield db
    finally:
        db.close()
