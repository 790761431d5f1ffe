"""Initial ledger sync schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

CUSTOMER_PK = "customers.id"


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("file_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("outstanding_balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("last_modified_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_customers_file_id", "customers", ["file_id"], unique=True
    )

    op.create_table(
        "consolidated_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("payment_date", sa.DateTime(), nullable=True),
        sa.Column("disbursement", sa.Numeric(19, 4), nullable=False),
        sa.Column("balance_snapshot", sa.Numeric(19, 4), nullable=False),
        sa.Column("payment_type_tag", sa.String(length=255), nullable=True),
        sa.Column("source_sheet", sa.String(length=255), nullable=True),
        sa.Column("source_row", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], [CUSTOMER_PK], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_consolidated_records_customer_id",
        "consolidated_records",
        ["customer_id"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("payment_type_tag", sa.String(length=255), nullable=True),
        sa.Column("import_timestamp", sa.DateTime(), nullable=False),
        sa.Column("sequence_in_day", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], [CUSTOMER_PK], ondelete="CASCADE"),
    )
    op.create_index("ix_payments_customer_id", "payments", ["customer_id"])
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"])

    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("sale_date", sa.DateTime(), nullable=False),
        sa.Column("total_amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("import_timestamp", sa.DateTime(), nullable=False),
        sa.Column("sequence_in_day", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], [CUSTOMER_PK], ondelete="CASCADE"),
    )
    op.create_index("ix_sales_customer_id", "sales", ["customer_id"])
    op.create_index("ix_sales_sale_date", "sales", ["sale_date"])

    op.create_table(
        "import_control_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("file_name", sa.String(length=300), nullable=False),
        sa.Column("file_id", sa.String(length=255), nullable=True),
        sa.Column("last_modified_at", sa.DateTime(), nullable=True),
        sa.Column("last_sync_at", sa.DateTime(), nullable=True),
        sa.Column("row_count", sa.Integer(), nullable=False),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("error_message", sa.String(length=1000), nullable=True),
    )
    op.create_index(
        "ix_import_control_entries_file_name",
        "import_control_entries",
        ["file_name"],
        unique=True,
    )

    op.create_table(
        "sync_status",
        sa.Column("id", sa.String(length=50), primary_key=True),
        sa.Column(
            "state",
            sa.Enum(
                "IN_PROGRESS",
                "COMPLETED",
                name="sync_state_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("reported_at", sa.DateTime(), nullable=False),
        sa.Column("files_updated", sa.Integer(), nullable=False),
        sa.Column("files_skipped", sa.Integer(), nullable=False),
        sa.Column("total_files", sa.Integer(), nullable=False),
        sa.Column("percent", sa.Integer(), nullable=False),
        sa.Column("duration_seconds", sa.Integer(), nullable=False),
        sa.Column("error_count", sa.Integer(), nullable=False),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("sync_status")
    op.drop_index(
        "ix_import_control_entries_file_name",
        table_name="import_control_entries",
    )
    op.drop_table("import_control_entries")
    op.drop_index("ix_sales_sale_date", table_name="sales")
    op.drop_index("ix_sales_customer_id", table_name="sales")
    op.drop_table("sales")
    op.drop_index("ix_payments_payment_date", table_name="payments")
    op.drop_index("ix_payments_customer_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index(
        "ix_consolidated_records_customer_id",
        table_name="consolidated_records",
    )
    op.drop_table("consolidated_records")
    op.drop_index("ix_customers_file_id", table_name="customers")
    op.drop_table("customers")
    sa.Enum(name="sync_state_enum").drop(op.get_bind(), checkfirst=True)
