"""003: create properties table

Revision ID: 003
Revises: 002
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE properties (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            title           VARCHAR(200)    NOT NULL,
            description     TEXT            NOT NULL,
            price           DOUBLE PRECISION NOT NULL,
            location        VARCHAR(255)    NOT NULL,
            property_type   VARCHAR(20)     NOT NULL,
            bedrooms        INTEGER         NOT NULL,
            bathrooms       INTEGER         NOT NULL,
            area            DOUBLE PRECISION NOT NULL,
            amenities       TEXT[]          NOT NULL DEFAULT '{}',
            images          TEXT[]          NOT NULL DEFAULT '{}',
            created_by      UUID            NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_properties_type CHECK (
                property_type IN ('Apartment', 'House', 'Villa', 'Condo', 'Townhouse')
            ),
            CONSTRAINT ck_properties_price     CHECK (price >= 0),
            CONSTRAINT ck_properties_bedrooms  CHECK (bedrooms >= 0),
            CONSTRAINT ck_properties_bathrooms CHECK (bathrooms >= 0),
            CONSTRAINT ck_properties_area      CHECK (area >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_properties_created_by ON properties (created_by);")
    op.execute("CREATE INDEX idx_properties_created_at ON properties (created_at DESC);")
    op.execute("CREATE INDEX idx_properties_price ON properties (price);")
    op.execute("CREATE INDEX idx_properties_type ON properties (property_type);")
    op.execute("CREATE INDEX idx_properties_bedrooms ON properties (bedrooms);")
    op.execute("""
        CREATE TRIGGER trg_properties_updated_at
            BEFORE UPDATE ON properties
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE properties IS 'Property listings, owned by created_by';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS properties CASCADE;")
