"""004: create favorites table

Revision ID: 004
Revises: 003
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE favorites (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            property_id     UUID            NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_favorites_user_property UNIQUE (user_id, property_id)
        );
    """)
    op.execute("CREATE INDEX idx_favorites_user_created ON favorites (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_favorites_property ON favorites (property_id);")
    op.execute("""
        CREATE TRIGGER trg_favorites_updated_at
            BEFORE UPDATE ON favorites
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS favorites CASCADE;")
