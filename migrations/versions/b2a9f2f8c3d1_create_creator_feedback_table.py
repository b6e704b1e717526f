from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "b2a9f2f8c3d1"
down_revision = "8d27b3c5e4a1"
branch_labels = None
depends_on = None

def upgrade():
    # Creator -> Pulse team support tickets (bug reports, ideas, feedback)
    op.create_table(
        "creator_feedback",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("creator_id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("subject", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["creator_id"], ["creators.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "category IN ('bug','feedback','idea','other')",
            name="ck_creator_feedback_category_valid",
        ),
    )
    op.create_index("ix_creator_feedback_creator_id", "creator_feedback", ["creator_id"], unique=False)
    op.create_index("ix_creator_feedback_company_id", "creator_feedback", ["company_id"], unique=False)

def downgrade():
    op.drop_index("ix_creator_feedback_company_id", table_name="creator_feedback")
    op.drop_index("ix_creator_feedback_creator_id", table_name="creator_feedback")
    op.drop_table("creator_feedback")
