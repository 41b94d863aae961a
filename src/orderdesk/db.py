from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from orderdesk.settings import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # Needed for SQLite + multithreaded servers
    connect_args = {"check_same_thread": False}


engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
