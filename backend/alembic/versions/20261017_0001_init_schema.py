"""init schema

Revision ID: 20261017_0001
Revises: None
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0001_init_schema"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(14, 2)


def _enum(*values: str, name: str) -> sa.Enum:
    # Stored as VARCHAR everywhere so enum expansions never need ALTER TYPE.
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=False)


def _timestamps(*, updated: bool = False) -> list:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now())]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()))
    return cols


def upgrade() -> None:
    role_enum = _enum("admin", "financeiro", "comercial", "auditoria", name="rolename")
    installment_status_enum = _enum("open", "paid", "overdue", name="installmentstatus")
    payment_type_enum = _enum("salary", "bonus", "advance", name="paymenttype")
    settlement_status_enum = _enum("pending", "paid", name="settlementstatus")

    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", role_enum, nullable=False, unique=True),
        sa.Column("description", sa.String(length=255)),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "companies",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("cnpj", sa.String(length=32), nullable=False, unique=True),
        sa.Column("state", sa.String(length=8), nullable=False),
        *_timestamps(updated=True),
    )
    op.create_index("ix_companies_state", "companies", ["state"])

    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "company_id",
            sa.String(length=36),
            sa.ForeignKey("companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("document", sa.String(length=32)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("entry_date", sa.Date()),
        sa.Column("exit_date", sa.Date()),
        *_timestamps(),
    )
    op.create_index("ix_clients_company_id", "clients", ["company_id"])
    op.create_index("ix_clients_name", "clients", ["name"])

    op.create_table(
        "contracts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "client_id",
            sa.String(length=36),
            sa.ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("description", sa.Text()),
        sa.Column("total_value", MONEY, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_contracts_client_id", "contracts", ["client_id"])

    op.create_table(
        "installments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "contract_id",
            sa.String(length=36),
            sa.ForeignKey("contracts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("installment_number", sa.Integer(), nullable=False),
        sa.Column("total_installments", sa.Integer(), nullable=False),
        sa.Column("value", MONEY, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("paid_date", sa.Date()),
        sa.Column("status", installment_status_enum, nullable=False, server_default="open"),
        sa.Column("expected_end_date", sa.Date()),
        sa.Column("payment_method", sa.String(length=32)),
        sa.Column("gross_value", MONEY),
        sa.Column("net_value", MONEY),
        sa.Column("boleto_fee", MONEY),
        *_timestamps(),
        sa.UniqueConstraint(
            "contract_id", "installment_number", name="uq_installments_contract_number"
        ),
    )
    op.create_index("ix_installments_contract_id", "installments", ["contract_id"])
    op.create_index("ix_installments_due_date", "installments", ["due_date"])
    op.create_index("ix_installments_status", "installments", ["status"])

    op.create_table(
        "employees",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=128)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("salary", MONEY, nullable=False, server_default="0"),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_employees_name", "employees", ["name"])

    op.create_table(
        "employee_payments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "employee_id",
            sa.String(length=36),
            sa.ForeignKey("employees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("payment_type", payment_type_enum, nullable=False, server_default="salary"),
        sa.Column("status", settlement_status_enum, nullable=False, server_default="pending"),
        sa.Column("description", sa.Text()),
        sa.Column("receipt_url", sa.String(length=512)),
        *_timestamps(updated=True),
    )
    op.create_index("ix_employee_payments_employee_id", "employee_payments", ["employee_id"])
    op.create_index("ix_employee_payments_payment_date", "employee_payments", ["payment_date"])

    op.create_table(
        "commissions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "employee_id",
            sa.String(length=36),
            sa.ForeignKey("employees.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "installment_id",
            sa.String(length=36),
            sa.ForeignKey("installments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("percentage", sa.Numeric(5, 2)),
        sa.Column("commission_date", sa.Date(), nullable=False),
        sa.Column("status", settlement_status_enum, nullable=False, server_default="pending"),
        sa.Column("paid_date", sa.Date()),
        sa.Column("description", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_commissions_employee_id", "commissions", ["employee_id"])
    op.create_index("ix_commissions_commission_date", "commissions", ["commission_date"])

    op.create_table(
        "fixed_bills",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "company_id",
            sa.String(length=36),
            sa.ForeignKey("companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("total_value", MONEY, nullable=False),
        sa.Column("total_installments", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        *_timestamps(updated=True),
    )
    op.create_index("ix_fixed_bills_company_id", "fixed_bills", ["company_id"])
    op.create_index("ix_fixed_bills_name", "fixed_bills", ["name"])

    op.create_table(
        "fixed_bill_installments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "fixed_bill_id",
            sa.String(length=36),
            sa.ForeignKey("fixed_bills.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("installment_number", sa.Integer(), nullable=False),
        sa.Column("value", MONEY, nullable=False),
        sa.Column("original_value", MONEY),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("paid_date", sa.Date()),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        sa.Column("payment_method", sa.String(length=32)),
        sa.Column("discount", MONEY, server_default="0"),
        sa.Column("notes", sa.Text()),
        *_timestamps(updated=True),
        sa.UniqueConstraint(
            "fixed_bill_id", "installment_number", name="uq_fixed_bill_installments_bill_number"
        ),
    )
    op.create_index(
        "ix_fixed_bill_installments_fixed_bill_id", "fixed_bill_installments", ["fixed_bill_id"]
    )
    op.create_index("ix_fixed_bill_installments_due_date", "fixed_bill_installments", ["due_date"])


def downgrade() -> None:
    for table in (
        "fixed_bill_installments",
        "fixed_bills",
        "commissions",
        "employee_payments",
        "employees",
        "installments",
        "contracts",
        "clients",
        "companies",
        "users",
        "roles",
    ):
        op.drop_table(table)
