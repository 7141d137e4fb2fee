"""005: create recommendations table

Revision ID: 005
Revises: 004
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE recommendations (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            sender_id       UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            recipient_id    UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            property_id     UUID            NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            message         TEXT,
            is_read         BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_recommendations_not_self CHECK (sender_id <> recipient_id)
        );
    """)
    op.execute(
        "CREATE INDEX idx_recommendations_recipient ON recommendations (recipient_id, created_at DESC);"
    )
    op.execute(
        "CREATE INDEX idx_recommendations_sender ON recommendations (sender_id, created_at DESC);"
    )
    op.execute("CREATE INDEX idx_recommendations_property ON recommendations (property_id);")
    op.execute("""
        CREATE TRIGGER trg_recommendations_updated_at
            BEFORE UPDATE ON recommendations
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS recommendations CASCADE;")
