"""Dialect-aware INSERT ... ON CONFLICT DO NOTHING."""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def insert_ignore_conflicts(session: Session, table, values: dict, index_elements: list[str]):
    """Build an insert that silently skips rows violating `index_elements` uniqueness.

    Postgres in production, SQLite in tests; both support ON CONFLICT.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table)
    elif dialect == "sqlite":
        stmt = sqlite.insert(table)
    else:
        raise NotImplementedError(f"ON CONFLICT not supported for dialect {dialect}")
    return stmt.values(**values).on_conflict_do_nothing(index_elements=index_elements)
