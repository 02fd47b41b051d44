from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from wellness.core.config import settings


def build_engine(uri: str):
    if uri.startswith("sqlite"):
        # One shared connection so in-memory databases survive across threads
        return create_engine(
            uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    # PostgreSQL configuration with connection pooling
    return create_engine(
        uri,
        pool_size=10,
        max_overflow=20,
        pool_recycle=300,      # Recycle connections every 5 minutes
        pool_pre_ping=True,    # Validate connections before use
        pool_timeout=30,
        echo=False,            # Set to True for SQL logging
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
