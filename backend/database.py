"""
Database connection for QuotePage

Layout templates and branding are read from the same database the
admin side writes them to. Quote rendering only reads.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

DATABASE_URL = os.getenv("QUOTEPAGE_DATABASE_URL", "postgresql:///quotepage_db")

DB_POOL_SIZE = int(os.getenv("QUOTEPAGE_DB_POOL_SIZE", "10"))
DB_MAX_OVERFLOW = int(os.getenv("QUOTEPAGE_DB_MAX_OVERFLOW", "20"))

engine = create_engine(
    DATABASE_URL,
    pool_size=DB_POOL_SIZE,         # Base connections to keep open
    max_overflow=DB_MAX_OVERFLOW,   # Additional connections when busy
    pool_timeout=30,                # Seconds to wait for connection before error
    pool_recycle=1800,              # Recycle connections after 30 min
    pool_pre_ping=True,             # Test connections before using
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Request-scoped session for FastAPI dependencies"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
