from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4c1f0a9e2b10"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("company_id", sa.String(length=64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_company_id", "users", ["company_id"], unique=False)
    # case-insensitive uniqueness on email
    op.create_index("uq_users_email_lower", "users", [sa.text("lower(email)")], unique=True)

    op.create_table(
        "creators",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=64), nullable=False),
        sa.Column("slug", sa.String(length=64), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_creators_company_id", "creators", ["company_id"], unique=True)
    op.create_index("ix_creators_slug", "creators", ["slug"], unique=True)

def downgrade():
    op.drop_index("ix_creators_slug", table_name="creators")
    op.drop_index("ix_creators_company_id", table_name="creators")
    op.drop_table("creators")
    op.drop_index("uq_users_email_lower", table_name="users")
    op.drop_index("ix_users_company_id", table_name="users")
    op.drop_table("users")
