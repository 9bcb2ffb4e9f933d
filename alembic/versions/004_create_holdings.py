"""004: create holdings table

Revision ID: 004
Revises: 003
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE holdings (
            id             BIGSERIAL    PRIMARY KEY,
            team_id        VARCHAR(64)  NOT NULL REFERENCES team_accounts (team_id),
            item_id        VARCHAR(32)  NOT NULL,
            quantity       BIGINT       NOT NULL,
            avg_buy_price  BIGINT       NOT NULL,
            created_at     TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at     TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_holdings_team_item        UNIQUE (team_id, item_id),
            CONSTRAINT ck_holdings_quantity_gt_0    CHECK (quantity > 0),
            CONSTRAINT ck_holdings_avg_price_gt_0   CHECK (avg_buy_price > 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_holdings_updated_at
            BEFORE UPDATE ON holdings
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE holdings IS 'Open positions; zero-quantity rows are deleted, never stored';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS holdings CASCADE;")
