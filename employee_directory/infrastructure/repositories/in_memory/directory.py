"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/directory.py
============================================================
Class: InMemoryDirectoryRepository

Responsibilities:
  - Almacenar Employees y Users en memoria (tests / APP_ENV=test).
  - Replicar las reglas del store Postgres:
      - unicidad: employees.email, users.username, users.email
      - version optimista (arranca en 1, +1 por escritura)
      - escrituras compuestas Employee+User atómicas
  - Mantener ordering determinístico alineado con Postgres (ORDER BY id).

Collaborators:
  - domain.entities.Employee
  - identity.users.User
  - domain.repositories.DirectoryRepository (contrato a implementar)
  - crosscutting.exceptions (StaleRecordError, DuplicateRecordError)

Constraints / Notes:
  - Thread-safe: toda lectura/escritura bajo Lock; una escritura compuesta
    es una única sección crítica (nadie observa medio par).
  - Repo puro: NO aplica políticas de acceso.
  - Entidades inmutables: se guardan copias nuevas (replace), nunca el input.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ....crosscutting.exceptions import DuplicateRecordError, StaleRecordError
from ....domain.entities import Employee
from ....domain.repositories import DirectoryRepository
from ....identity.users import User


class InMemoryDirectoryRepository(DirectoryRepository):
    """
    Repositorio in-memory, thread-safe, del directorio.

    Modelo mental:
    - _employees / _users son las "tablas" (id -> entidad).
    - Los ids se asignan con contadores monotónicos (emula SERIAL).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._employees: Dict[int, Employee] = {}
        self._users: Dict[int, User] = {}
        self._next_employee_id = 1
        self._next_user_id = 1

    # =========================================================
    # Helpers internos (asumen lock tomado)
    # =========================================================
    def _user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def _user_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def _employee_by_email(self, email: str) -> Optional[Employee]:
        for employee in self._employees.values():
            if employee.email == email:
                return employee
        return None

    def _ensure_employee_email_free(
        self, email: str, *, except_id: int | None = None
    ) -> None:
        other = self._employee_by_email(email)
        if other is not None and other.id != except_id:
            raise DuplicateRecordError(
                "El email ya pertenece a otro empleado.", field="email"
            )

    def _ensure_user_free(self, user: User, *, except_id: int | None = None) -> None:
        other = self._user_by_username(user.username)
        if other is not None and other.id != except_id:
            raise DuplicateRecordError(
                f"El username '{user.username}' ya existe.", field="username"
            )
        other = self._user_by_email(user.email)
        if other is not None and other.id != except_id:
            raise DuplicateRecordError(
                "El email ya pertenece a otro usuario.", field="email"
            )

    # =========================================================
    # Lecturas
    # =========================================================
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        with self._lock:
            return self._employees.get(employee_id)

    def get_employee_by_email(self, email: str) -> Optional[Employee]:
        with self._lock:
            return self._employee_by_email(email)

    def list_employees(self) -> List[Employee]:
        with self._lock:
            return [self._employees[k] for k in sorted(self._employees)]

    def list_employees_by_department(self, department: str) -> List[Employee]:
        with self._lock:
            return [
                self._employees[k]
                for k in sorted(self._employees)
                if self._employees[k].department == department
            ]

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return self._user_by_username(username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._user_by_email(email)

    def find_employee_for_username(self, username: str) -> Optional[Employee]:
        with self._lock:
            user = self._user_by_username(username)
            if user is None:
                return None
            return self._employee_by_email(user.email)

    # =========================================================
    # Escrituras compuestas
    # =========================================================
    def create_employee_with_user(
        self, employee: Employee, user: User
    ) -> Tuple[Employee, User]:
        with self._lock:
            self._ensure_employee_email_free(employee.email)
            self._ensure_user_free(user)

            created = replace(employee, id=self._next_employee_id, version=1)
            created_user = replace(user, id=self._next_user_id)

            self._next_employee_id += 1
            self._next_user_id += 1
            self._employees[created.id] = created
            self._users[created_user.id] = created_user
            return created, created_user

    def update_employee_with_user(
        self,
        employee: Employee,
        *,
        expected_version: int,
        user: Optional[User],
    ) -> Tuple[Employee, Optional[User]]:
        with self._lock:
            current = (
                self._employees.get(employee.id) if employee.id is not None else None
            )
            if current is None or current.version != expected_version:
                raise StaleRecordError(
                    f"Employee {employee.id} cambió o ya no existe "
                    f"(version esperada {expected_version})."
                )

            self._ensure_employee_email_free(employee.email, except_id=employee.id)

            # Un User que desapareció entre lectura y escritura se tolera.
            stored_user: Optional[User] = None
            if user is not None and user.id in self._users:
                self._ensure_user_free(user, except_id=user.id)
                stored_user = user

            updated = replace(employee, version=current.version + 1)
            self._employees[updated.id] = updated
            if stored_user is not None:
                self._users[stored_user.id] = stored_user
            return updated, stored_user

    def delete_employee_with_user(self, employee_id: int, *, expected_version: int) -> None:
        with self._lock:
            current = self._employees.get(employee_id)
            if current is None or current.version != expected_version:
                raise StaleRecordError(
                    f"Employee {employee_id} cambió o ya no existe "
                    f"(version esperada {expected_version})."
                )
            del self._employees[employee_id]
            # R: el User se empareja por el email vigente, no el leído antes
            for user_id in [
                u.id for u in self._users.values() if u.email == current.email
            ]:
                del self._users[user_id]

    def ping(self) -> bool:
        return True
