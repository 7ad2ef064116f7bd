from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from class_scheduler.config import settings

# pool_pre_ping keeps stale pooled connections from failing the first query
engine = create_engine(settings.database_url, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    # register the tables on Base.metadata before creating them
    from class_scheduler.models import pattern_slot, section, time_slot  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
