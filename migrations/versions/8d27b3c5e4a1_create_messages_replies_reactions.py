from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "8d27b3c5e4a1"
down_revision = "4c1f0a9e2b10"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "messages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("creator_id", sa.String(length=36), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("tag", sa.String(length=20), nullable=False),
        sa.Column("product_category", sa.String(length=32), nullable=True),
        sa.Column("reviewed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["creator_id"], ["creators.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("tag IN ('question','feedback','confession')", name="ck_messages_tag_valid"),
        sa.CheckConstraint(
            "product_category IS NULL OR product_category IN "
            "('main_product','service','feature_request','bug_report','other')",
            name="ck_messages_product_category_valid",
        ),
    )
    op.create_index("ix_messages_creator_id", "messages", ["creator_id"], unique=False)
    op.create_index("ix_messages_creator_created_at", "messages", ["creator_id", "created_at"], unique=False)

    op.create_table(
        "replies",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("message_id", sa.String(length=36), nullable=False),
        sa.Column("reply_text", sa.Text(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_replies_message_id", "replies", ["message_id"], unique=False)

    op.create_table(
        "reactions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("message_id", sa.String(length=36), nullable=False),
        sa.Column("user_hash", sa.String(length=64), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["message_id"], ["messages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("message_id", "user_hash", "emoji", name="uq_reactions_message_user_emoji"),
    )
    op.create_index("ix_reactions_message_id", "reactions", ["message_id"], unique=False)

def downgrade():
    op.drop_index("ix_reactions_message_id", table_name="reactions")
    op.drop_table("reactions")
    op.drop_index("ix_replies_message_id", table_name="replies")
    op.drop_table("replies")
    op.drop_index("ix_messages_creator_created_at", table_name="messages")
    op.drop_index("ix_messages_creator_id", table_name="messages")
    op.drop_table("messages")
