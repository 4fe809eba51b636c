#!/usr/bin/env python
"""Create all tables from the SQLAlchemy models on `DATABASE_URL`.

For local SQLite setups; PostgreSQL deployments run the Alembic migrations.

Usage:
  python scripts/create_tables.py
"""
import os
import sys

# Ensure project root is on sys.path so `clubhub` package can be imported
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import inspect

from clubhub.database import Base, engine
import clubhub.models  # noqa: F401  registers the tables on Base.metadata


def main():
    Base.metadata.create_all(engine)
    tables = inspect(engine).get_table_names()
    print("tables:", ", ".join(sorted(tables)))


if __name__ == "__main__":
    main()
