"""Game record table."""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "0001_games"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
    op.create_table(
        "game",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("players", json_type, nullable=False),
        sa.Column("scores", json_type, nullable=False),
        sa.Column("mode", sa.String(), nullable=False),
        sa.Column(
            "played_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_game_played_at", "game", [sa.text("played_at DESC")])


def downgrade() -> None:
    op.drop_index("ix_game_played_at", table_name="game")
    op.drop_table("game")
