"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/directory.py
============================================================
Class: PostgresDirectoryRepository

Responsibilities:
- Implementar el directory store en PostgreSQL (SQL crudo, psycopg 3).
- Lecturas: employee por id/email, scan, scan por departamento, users por
  username/email y el join username -> employee (por email).
- Escrituras compuestas Employee+User en UNA transacción (conn.transaction()).
- Concurrencia optimista: UPDATE/DELETE ... WHERE id = %s AND version = %s.

Collaborators:
- domain.entities.Employee, identity.users.User / UserRole
- crosscutting.exceptions: DatabaseError, StaleRecordError, DuplicateRecordError
- crosscutting.logger.logger
- psycopg_pool.ConnectionPool
- Tablas: employees, users

Constraints / Notes:
- Sin lógica de negocio aquí (políticas viven arriba).
- Queries siempre parametrizadas.
- UniqueViolation -> DuplicateRecordError (campo deducido del constraint).
- Cualquier otra falla se loguea y se envuelve en DatabaseError.
============================================================
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple, TypeVar

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    StaleRecordError,
)
from ....crosscutting.logger import logger
from ....domain.entities import Employee
from ....identity.users import User, UserRole

T = TypeVar("T")

# R: nombres de constraints definidos en alembic/versions/001_directory_foundation.py
_CONSTRAINT_FIELDS = {
    "employees_email_key": "email",
    "users_email_key": "email",
    "users_username_key": "username",
}


class PostgresDirectoryRepository:
    """R: Implementación PostgreSQL del directory store."""

    _EMPLOYEE_COLUMNS = """
        id, first_name, last_name, email, job_title, salary,
        department, role, version
    """
    _USER_COLUMNS = "id, username, email, password_hash, role"

    _ORDER_BY = "ORDER BY id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_employee(row: tuple) -> Employee:
        (
            employee_id,
            first_name,
            last_name,
            email,
            job_title,
            salary,
            department,
            role,
            version,
        ) = row
        return Employee(
            id=employee_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            job_title=job_title,
            salary=salary,
            department=department,
            role=UserRole(role),
            version=version,
        )

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        user_id, username, email, password_hash, role = row
        return User(
            id=user_id,
            username=username,
            email=email,
            password_hash=password_hash,
            role=UserRole(role),
        )

    # =========================================================
    # Helpers de ejecución (DRY + errores consistentes)
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _in_transaction(
        self, work: Callable[[object], T], *, context_msg: str, extra: dict
    ) -> T:
        """
        R: Ejecuta `work(conn)` dentro de una transacción.

        - StaleRecordError sale tal cual (rollback implícito).
        - UniqueViolation -> DuplicateRecordError.
        - Resto -> DatabaseError (logueado).
        """
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    return work(conn)
        except StaleRecordError:
            raise
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None)
            field = _CONSTRAINT_FIELDS.get(constraint or "")
            logger.info(
                "PostgresDirectoryRepository: unique violation",
                extra={**extra, "constraint": constraint},
            )
            raise DuplicateRecordError(
                f"Registro duplicado ({field or constraint or 'unique'}).",
                field=field,
                original_error=exc,
            ) from exc
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _select_employees(self, *, where_sql: str, params: list[object]) -> list[Employee]:
        """
        where_sql:
          - "" o "WHERE ..." construido SOLO desde este repositorio.
        """
        query = f"""
            SELECT {self._EMPLOYEE_COLUMNS}
            FROM employees
            {where_sql}
            {self._ORDER_BY}
        """
        rows = self._fetchall(
            query=query,
            params=params,
            context_msg="PostgresDirectoryRepository: Failed to select employees",
            extra={"where_sql": where_sql},
        )
        return [self._row_to_employee(r) for r in rows]

    # =========================================================
    # Lecturas
    # =========================================================
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        row = self._fetchone(
            query=f"SELECT {self._EMPLOYEE_COLUMNS} FROM employees WHERE id = %s",
            params=[employee_id],
            context_msg="PostgresDirectoryRepository: Failed to get employee",
            extra={"employee_id": employee_id},
        )
        return self._row_to_employee(row) if row else None

    def get_employee_by_email(self, email: str) -> Optional[Employee]:
        row = self._fetchone(
            query=f"SELECT {self._EMPLOYEE_COLUMNS} FROM employees WHERE email = %s",
            params=[email],
            context_msg="PostgresDirectoryRepository: Failed to get employee by email",
            extra={},
        )
        return self._row_to_employee(row) if row else None

    def list_employees(self) -> list[Employee]:
        return self._select_employees(where_sql="", params=[])

    def list_employees_by_department(self, department: str) -> list[Employee]:
        return self._select_employees(
            where_sql="WHERE department = %s", params=[department]
        )

    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {self._USER_COLUMNS} FROM users WHERE username = %s",
            params=[username],
            context_msg="PostgresDirectoryRepository: Failed to get user by username",
            extra={"username": username},
        )
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {self._USER_COLUMNS} FROM users WHERE email = %s",
            params=[email],
            context_msg="PostgresDirectoryRepository: Failed to get user by email",
            extra={},
        )
        return self._row_to_user(row) if row else None

    def find_employee_for_username(self, username: str) -> Optional[Employee]:
        row = self._fetchone(
            query="""
                SELECT e.id, e.first_name, e.last_name, e.email, e.job_title,
                       e.salary, e.department, e.role, e.version
                FROM users u
                JOIN employees e ON e.email = u.email
                WHERE u.username = %s
            """,
            params=[username],
            context_msg="PostgresDirectoryRepository: Failed to resolve username",
            extra={"username": username},
        )
        return self._row_to_employee(row) if row else None

    # =========================================================
    # Escrituras compuestas
    # =========================================================
    def create_employee_with_user(
        self, employee: Employee, user: User
    ) -> Tuple[Employee, User]:
        def work(conn) -> Tuple[Employee, User]:
            employee_row = conn.execute(
                f"""
                INSERT INTO employees (
                    first_name, last_name, email, job_title, salary,
                    department, role, version
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, 1)
                RETURNING {self._EMPLOYEE_COLUMNS}
                """,
                (
                    employee.first_name,
                    employee.last_name,
                    employee.email,
                    employee.job_title,
                    employee.salary,
                    employee.department,
                    employee.role.value,
                ),
            ).fetchone()
            user_row = conn.execute(
                f"""
                INSERT INTO users (username, email, password_hash, role)
                VALUES (%s, %s, %s, %s)
                RETURNING {self._USER_COLUMNS}
                """,
                (user.username, user.email, user.password_hash, user.role.value),
            ).fetchone()
            return self._row_to_employee(employee_row), self._row_to_user(user_row)

        return self._in_transaction(
            work,
            context_msg="PostgresDirectoryRepository: Failed to create employee",
            extra={"username": user.username},
        )

    def update_employee_with_user(
        self,
        employee: Employee,
        *,
        expected_version: int,
        user: Optional[User],
    ) -> Tuple[Employee, Optional[User]]:
        def work(conn) -> Tuple[Employee, Optional[User]]:
            employee_row = conn.execute(
                f"""
                UPDATE employees
                SET first_name = %s,
                    last_name = %s,
                    email = %s,
                    job_title = %s,
                    salary = %s,
                    department = %s,
                    role = %s,
                    version = version + 1
                WHERE id = %s AND version = %s
                RETURNING {self._EMPLOYEE_COLUMNS}
                """,
                (
                    employee.first_name,
                    employee.last_name,
                    employee.email,
                    employee.job_title,
                    employee.salary,
                    employee.department,
                    employee.role.value,
                    employee.id,
                    expected_version,
                ),
            ).fetchone()
            if employee_row is None:
                raise StaleRecordError(
                    f"Employee {employee.id} cambió o ya no existe "
                    f"(version esperada {expected_version})."
                )

            user_row = None
            if user is not None:
                user_row = conn.execute(
                    f"""
                    UPDATE users
                    SET username = %s, email = %s, role = %s
                    WHERE id = %s
                    RETURNING {self._USER_COLUMNS}
                    """,
                    (user.username, user.email, user.role.value, user.id),
                ).fetchone()

            return (
                self._row_to_employee(employee_row),
                self._row_to_user(user_row) if user_row else None,
            )

        return self._in_transaction(
            work,
            context_msg="PostgresDirectoryRepository: Failed to update employee",
            extra={"employee_id": employee.id},
        )

    def delete_employee_with_user(self, employee_id: int, *, expected_version: int) -> None:
        def work(conn) -> None:
            # R: el User se borra por el email de la fila efectivamente borrada
            deleted = conn.execute(
                "DELETE FROM employees WHERE id = %s AND version = %s RETURNING email",
                (employee_id, expected_version),
            ).fetchone()
            if deleted is None:
                raise StaleRecordError(
                    f"Employee {employee_id} cambió o ya no existe "
                    f"(version esperada {expected_version})."
                )
            conn.execute("DELETE FROM users WHERE email = %s", (deleted[0],))

        self._in_transaction(
            work,
            context_msg="PostgresDirectoryRepository: Failed to delete employee",
            extra={"employee_id": employee_id},
        )

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=[],
            context_msg="PostgresDirectoryRepository: ping failed",
            extra={},
        )
        return bool(row)
