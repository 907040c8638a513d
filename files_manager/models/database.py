# files_manager/models/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from files_manager.core.config import get_settings


class Base(DeclarativeBase):
    pass


url = get_settings().database_url

engine_args = {}
if url.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty database
        engine_args["poolclass"] = StaticPool

engine = create_engine(url, pool_pre_ping=True, **engine_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
