"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Every model registers on Base.metadata (Alembic and test fixtures read it)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests and local runs
"""
