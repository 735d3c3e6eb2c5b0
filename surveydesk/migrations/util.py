"""Utility functions for Alembic migrations."""
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from alembic import op


def get_uuid_type():
    """Get the appropriate UUID column type for the current database dialect.

    Returns:
        - PostgreSQL: native UUID type (with as_uuid=True for Python UUID objects)
        - SQLite/other: String(36) for hex-formatted UUID strings

    Example usage in a migration:
        from surveydesk.migrations.util import get_uuid_type

        def upgrade() -> None:
            uuid = get_uuid_type()
            op.create_table(
                'my_table',
                sa.Column('id', uuid, nullable=False),
                ...
            )
    """
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        return UUID(as_uuid=True)
    return sa.String(length=36)


def get_timestamp_default():
    """Get the appropriate server default for timestamp columns.

    Returns:
        - PostgreSQL: NOW() function
        - SQLite: CURRENT_TIMESTAMP
    """
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        return sa.text('NOW()')
    return sa.text('CURRENT_TIMESTAMP')
