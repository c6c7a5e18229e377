from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(database_url: str, sslmode: str = None) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            # One shared connection, otherwise every checkout sees an empty database
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    elif sslmode and database_url.startswith("postgresql"):
        # If you're using PostgreSQL on Render or similar, keep sslmode=require
        connect_args["sslmode"] = sslmode

    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_schema(engine: Engine, drop_first: bool = False):
    # Register the tables on Base.metadata
    from taskkeeper.models import task, user  # noqa: F401

    if drop_first:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
