"""005: create transactions table

Revision ID: 005
Revises: 004
Create Date: 2026-10-12
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id              BIGSERIAL     PRIMARY KEY,
            team_id         VARCHAR(64)   NOT NULL REFERENCES team_accounts (team_id),
            tx_type         VARCHAR(20)   NOT NULL,
            label           VARCHAR(200)  NOT NULL,
            item_id         VARCHAR(32),
            quantity        BIGINT        NOT NULL DEFAULT 0,
            amount          BIGINT        NOT NULL,
            balance_after   BIGINT        NOT NULL,
            reference_id    VARCHAR(64),
            created_at      TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type CHECK (
                tx_type IN ('BUY', 'SELL', 'QUIZ', 'GAME_WIN', 'PENALTY')
            ),
            CONSTRAINT ck_transactions_balance_gte_0 CHECK (balance_after >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_transactions_team_id ON transactions (team_id, id DESC);")
    op.execute("""
        CREATE UNIQUE INDEX uq_transactions_team_type_reference
        ON transactions (team_id, tx_type, reference_id)
        WHERE reference_id IS NOT NULL;
    """)
    op.execute("COMMENT ON TABLE transactions IS 'Append-only team transaction log, signed amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
