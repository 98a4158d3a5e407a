"""
Name: HRAdmin Bootstrap Script

Responsibilities:
  - Create the first HRAdmin (Employee record + login User) idempotently
  - Hash passwords with Argon2
  - Store both rows in PostgreSQL within one transaction
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from employee_directory.domain.entities import derive_username  # noqa: E402
from employee_directory.identity.users import UserRole  # noqa: E402
from employee_directory.infrastructure.services import (  # noqa: E402
    Argon2PasswordHasher,
)


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create an HRAdmin.")
    return db_url


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create the first HRAdmin employee and login (idempotent)."
    )
    parser.add_argument("--first-name", required=True)
    parser.add_argument("--last-name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--department", default="HR")
    parser.add_argument("--job-title", default="HR Administrator")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    return parser.parse_args(argv)


def _required(value: str, label: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise SystemExit(f"{label} is required.")
    return normalized


def _maybe_create_admin(db_url: str, args: argparse.Namespace, password: str) -> None:
    first_name = _required(args.first_name, "First name")
    last_name = _required(args.last_name, "Last name")
    email = _required(args.email, "Email")
    username = derive_username(first_name, last_name)
    role = UserRole.HR_ADMIN.value

    with psycopg.connect(db_url) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT id, role FROM employees WHERE email = %s", (email,))
            row = cur.fetchone()
            if row:
                print(f"Employee already exists: id={row[0]} email={email} role={row[1]}")
                return

            password_hash = Argon2PasswordHasher().hash(password)
            cur.execute(
                """
                INSERT INTO employees (
                    first_name, last_name, email, job_title, salary,
                    department, role, version
                )
                VALUES (%s, %s, %s, %s, 0, %s, %s, 1)
                RETURNING id
                """,
                (
                    first_name,
                    last_name,
                    email,
                    _required(args.job_title, "Job title"),
                    _required(args.department, "Department"),
                    role,
                ),
            )
            employee_id = cur.fetchone()[0]
            cur.execute(
                """
                INSERT INTO users (username, email, password_hash, role)
                VALUES (%s, %s, %s, %s)
                """,
                (username, email, password_hash, role),
            )
        conn.commit()
        print(
            f"Created HRAdmin: employee_id={employee_id} "
            f"username={username} email={email}"
        )


def main() -> None:
    args = _parse_args()
    db_url = _require_database_url()
    password = args.password or _prompt_password()
    _maybe_create_admin(db_url, args, password)


if __name__ == "__main__":
    main()
