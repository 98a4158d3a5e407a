"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_directory_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema del directorio desde cero: employees + users.
  - Definir constraints de unicidad con nombres estables (el repositorio
    Postgres los traduce a DuplicateRecordError.field).
  - Columna version para concurrencia optimista en employees.

Collaborators:
  - PostgreSQL 16+
  - infrastructure/repositories/postgres/directory.py (usa este esquema)

Policy:
  - Migración BASELINE. Downgrade elimina ambas tablas.
  - La relación Employee <-> User es por email (sin FK): el par se mantiene
    desde la aplicación dentro de una transacción.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_directory_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ROLES = "('HRAdmin', 'Manager', 'Employee')"


def upgrade() -> None:
    # =========================================================
    # 1) EMPLOYEES
    # =========================================================
    op.create_table(
        "employees",
        sa.Column("id", sa.BigInteger, sa.Identity(), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("job_title", sa.String(150), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Employee'"),
        ),
        sa.Column(
            "version",
            sa.Integer,
            nullable=False,
            server_default=sa.text("1"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
        sa.UniqueConstraint("email", name="employees_email_key"),
        sa.CheckConstraint(f"role IN {_ROLES}", name="ck_employees_role"),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary"),
    )

    # Listado de Manager: filtra por departamento.
    op.create_index("ix_employees_department", "employees", ["department"])

    # =========================================================
    # 2) USERS (credenciales)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity(), nullable=False),
        sa.Column("username", sa.String(201), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.CheckConstraint(f"role IN {_ROLES}", name="ck_users_role"),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_table("employees")
