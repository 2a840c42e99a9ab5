"""initial freightdesk schema

Revision ID: 5f1c2a9d7e01
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5f1c2a9d7e01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=255)),
        sa.Column("phone", sa.String(length=50)),
        sa.Column("user_type", sa.String(length=20), nullable=False, server_default="customer"),
        sa.Column("price_ratio", sa.Float(), nullable=False, server_default="0"),
        sa.Column("bonus_credit_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_user_type", "users", ["user_type"])

    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "role_permissions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("role_id", sa.String(length=36), sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("menu_key", sa.String(length=100), nullable=False),
        sa.Column("menu_title", sa.String(length=255), nullable=False),
        sa.Column("parent_key", sa.String(length=100)),
        sa.Column("can_view", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("role_id", "menu_key", name="uq_role_permissions_role_menu"),
    )
    op.create_index("ix_role_permissions_role_id", "role_permissions", ["role_id"])

    op.create_table(
        "user_roles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.String(length=36), sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])

    op.create_table(
        "user_balances",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("current_balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pending_balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("credit_limit_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "balance_transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("transaction_id", sa.String(length=32), nullable=False, unique=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order_id", sa.String(length=36)),
        sa.Column("order_number", sa.String(length=100)),
        sa.Column("order_account", sa.String(length=32)),
        sa.Column("company_name", sa.String(length=255)),
        sa.Column("user_email", sa.String(length=255)),
        sa.Column("transaction_type", sa.String(length=20), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("base_amount_cents", sa.Integer()),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("description", sa.Text()),
        sa.Column("payment_method", sa.String(length=50)),
        sa.Column("reference_id", sa.String(length=100)),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("is_supervisor_transaction", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("details", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_balance_transactions_user_id", "balance_transactions", ["user_id"])
    op.create_index("ix_balance_transactions_order_id", "balance_transactions", ["order_id"])
    op.create_index("ix_balance_transactions_transaction_type", "balance_transactions", ["transaction_type"])
    op.create_index(
        "ix_balance_transactions_is_supervisor_transaction",
        "balance_transactions",
        ["is_supervisor_transaction"],
    )
    op.create_index("ix_balance_transactions_created_at", "balance_transactions", ["created_at"])

    op.create_table(
        "addresses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("address_name", sa.String(length=255), nullable=False),
        sa.Column("contact_name", sa.String(length=255), nullable=False),
        sa.Column("contact_phone", sa.String(length=50), nullable=False),
        sa.Column("contact_email", sa.String(length=255), nullable=False),
        sa.Column("company_name", sa.String(length=255)),
        sa.Column("address_line1", sa.String(length=255), nullable=False),
        sa.Column("address_line2", sa.String(length=255)),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("state", sa.String(length=50)),
        sa.Column("postal_code", sa.String(length=20), nullable=False),
        sa.Column("country", sa.String(length=2), nullable=False, server_default="US"),
        sa.Column("address_type", sa.String(length=20), nullable=False, server_default="both"),
        sa.Column("address_classification", sa.String(length=20), nullable=False, server_default="Unknown"),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_addresses_user_id", "addresses", ["user_id"])

    op.create_table(
        "payment_configs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("admin_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("country", sa.String(length=2), nullable=False),
        sa.Column("payment_method", sa.String(length=50), nullable=False),
        sa.Column("account_name", sa.String(length=255), nullable=False),
        sa.Column("account_number", sa.String(length=100), nullable=False),
        sa.Column("bank_name", sa.String(length=255)),
        sa.Column("routing_number", sa.String(length=50)),
        sa.Column("swift_code", sa.String(length=50)),
        sa.Column("additional_info", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("country", "payment_method", name="uq_payment_configs_country_method"),
    )
    op.create_index("ix_payment_configs_admin_id", "payment_configs", ["admin_id"])
    op.create_index("ix_payment_configs_country", "payment_configs", ["country"])

    op.create_table(
        "top_up_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "payment_config_id",
            sa.String(length=36),
            sa.ForeignKey("payment_configs.id"),
            nullable=False,
        ),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("approved_amount_cents", sa.Integer()),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_reference", sa.String(length=255)),
        sa.Column("customer_notes", sa.Text()),
        sa.Column("payment_details", sa.JSON()),
        sa.Column("admin_notes", sa.Text()),
        sa.Column("reviewed_by", sa.String(length=36), sa.ForeignKey("users.id")),
        sa.Column("reviewed_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_top_up_requests_user_id", "top_up_requests", ["user_id"])
    op.create_index("ix_top_up_requests_payment_config_id", "top_up_requests", ["payment_config_id"])
    op.create_index("ix_top_up_requests_status", "top_up_requests", ["status"])
    op.create_index("ix_top_up_requests_created_at", "top_up_requests", ["created_at"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order_number", sa.String(length=100), nullable=False),
        sa.Column("quote_number", sa.String(length=100)),
        sa.Column("rate_id", sa.String(length=100)),
        sa.Column("reference_number", sa.String(length=100)),
        sa.Column("carrier_name", sa.String(length=255)),
        sa.Column("carrier_scac", sa.String(length=20)),
        sa.Column("carrier_guarantee", sa.String(length=255)),
        sa.Column("service_type", sa.String(length=20), nullable=False, server_default="LTL"),
        sa.Column("total_amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("base_amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="pending_review"),
        sa.Column("status_history", sa.JSON()),
        sa.Column("origin", sa.JSON()),
        sa.Column("destination", sa.JSON()),
        sa.Column("contact", sa.JSON()),
        sa.Column("pickup_date", sa.Date()),
        sa.Column("estimated_delivery_date", sa.Date()),
        sa.Column("tracking_number", sa.String(length=100)),
        sa.Column("pro_number", sa.String(length=100)),
        sa.Column("audit_remark", sa.Text()),
        sa.Column("refund_status", sa.String(length=20)),
        sa.Column("refunded_at", sa.DateTime(timezone=True)),
        sa.Column("carrier_response", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_order_number", "orders", ["order_number"])
    op.create_index("ix_orders_status", "orders", ["status"])
    op.create_index("ix_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("order_id", sa.String(length=36), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(length=255)),
        sa.Column("package_type", sa.String(length=50)),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("weight", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_weight", sa.Float(), nullable=False, server_default="0"),
        sa.Column("length", sa.Float()),
        sa.Column("width", sa.Float()),
        sa.Column("height", sa.Float()),
        sa.Column("freight_class", sa.String(length=10)),
        sa.Column("nmfc", sa.String(length=50)),
        sa.Column("is_stackable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_hazardous", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])


def downgrade() -> None:
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("top_up_requests")
    op.drop_table("payment_configs")
    op.drop_table("addresses")
    op.drop_table("balance_transactions")
    op.drop_table("user_balances")
    op.drop_table("user_roles")
    op.drop_table("role_permissions")
    op.drop_table("roles")
    op.drop_table("users")
