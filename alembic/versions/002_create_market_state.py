"""002: create market_state and item_states tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE market_state (
            id                   SMALLINT     PRIMARY KEY,
            current_round        INT          NOT NULL DEFAULT 0,
            total_rounds         INT          NOT NULL,
            active_event         VARCHAR(20),
            event_round          INT,
            market_frozen        BOOLEAN      NOT NULL DEFAULT FALSE,
            market_freeze_until  TIMESTAMPTZ,
            updated_at           TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_market_state_singleton CHECK (id = 1),
            CONSTRAINT ck_market_state_round_range CHECK (
                current_round >= 0 AND current_round <= total_rounds
            ),
            CONSTRAINT ck_market_state_event CHECK (
                active_event IS NULL OR active_event IN ('CRASH', 'RECOVERY', 'BOOM')
            )
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_market_state_updated_at
            BEFORE UPDATE ON market_state
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE item_states (
            item_id          VARCHAR(32)  PRIMARY KEY,
            current_price    BIGINT       NOT NULL,
            change_bps       INT          NOT NULL DEFAULT 0,
            is_frozen        BOOLEAN      NOT NULL DEFAULT FALSE,
            admin_extra_bps  INT          NOT NULL DEFAULT 0,
            price_history    TEXT         NOT NULL DEFAULT '[]',
            news_history     TEXT         NOT NULL DEFAULT '[]',
            updated_at       TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_item_states_price_gt_0 CHECK (current_price > 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_item_states_updated_at
            BEFORE UPDATE ON item_states
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE market_state IS 'Singleton market row (id = 1); freeze deadline in UTC';")
    op.execute("COMMENT ON TABLE item_states IS 'Per-item runtime state; prices in cents, changes in basis points';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS item_states CASCADE;")
    op.execute("DROP TABLE IF EXISTS market_state CASCADE;")
