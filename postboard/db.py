"""Database schema and engine construction."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

metadata = MetaData()

contacts = Table(
    "contacts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String, nullable=False),
    Column("body", Text, nullable=False),
    Column("files", String, nullable=True),
)

posts = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String, nullable=False),
    Column("body", Text, nullable=False),
    Column("published", Boolean, nullable=False),
)


def establish_connection(database_url: str | None = None) -> Engine:
    """Build a pooled engine, reading DATABASE_URL from the environment or a .env file if no URL is given."""
    if database_url is None:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)
        database_url = os.environ.get("DATABASE_URL")
        if not database_url:
            raise RuntimeError("DATABASE_URL must be set")
    try:
        engine = create_engine(database_url)
        metadata.create_all(engine)
    except (SQLAlchemyError, ImportError) as exc:
        raise RuntimeError("Failed to create database connection pool") from exc
    return engine