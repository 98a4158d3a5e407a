"""
===============================================================================
TARJETA CRC — employee_directory/interfaces/api/http/routers/employees.py
===============================================================================

Class/Module:
    Employees Router

Responsibilities:
    - Exponer endpoints HTTP del directorio (list/get/create/update/delete).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir EmployeeError -> RFC7807.
    - Gate de roles en el borde: solo HRAdmin y Manager mutan el directorio.
    - Aplicar ClaimsRefresh (reemitir sesión + cookie) fuera de la transacción.

Collaborators:
    - employee_directory.application.usecases.employees
    - employee_directory.identity.auth_users (require_principal, require_roles,
      set_auth_cookie)
    - employee_directory.container (factories DI)
    - schemas.employees (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
    - Error Mapping
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from employee_directory.application.usecases.employees import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    EmployeeInput,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)
from employee_directory.container import (
    get_create_employee_use_case,
    get_delete_employee_use_case,
    get_get_employee_use_case,
    get_list_employees_use_case,
    get_session_issuer,
    get_update_employee_use_case,
)
from employee_directory.crosscutting.error_responses import internal_error
from employee_directory.crosscutting.logger import logger
from employee_directory.domain.directory_policy import DirectoryActor
from employee_directory.domain.entities import Employee
from employee_directory.domain.services import SessionIssuer
from employee_directory.identity.auth_users import (
    Principal,
    require_principal,
    require_roles,
    set_auth_cookie,
)
from employee_directory.identity.users import UserRole

from employee_directory.interfaces.api.http.error_mapping import raise_employee_error
from employee_directory.interfaces.api.http.schemas.employees import (
    CreateEmployeeReq,
    EmployeeFieldsReq,
    EmployeeRes,
    EmployeesListRes,
    SyncedUserRes,
    UpdateEmployeeReq,
    UpdateEmployeeRes,
)

router = APIRouter()

# R: las mutaciones solo admiten HRAdmin y Manager (el core acota al Manager)
_require_directory_editor = require_roles(UserRole.HR_ADMIN, UserRole.MANAGER)


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _to_actor(principal: Principal) -> DirectoryActor:
    return DirectoryActor(username=principal.username, role=principal.role)


def _to_input(req: EmployeeFieldsReq, *, password: str | None = None) -> EmployeeInput:
    return EmployeeInput(
        first_name=req.first_name,
        last_name=req.last_name,
        email=req.email,
        job_title=req.job_title,
        salary=req.salary,
        department=req.department,
        role=req.role,
        password=password,
    )


def _to_employee_res(employee: Employee) -> EmployeeRes:
    return EmployeeRes(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        full_name=employee.full_name,
        email=employee.email,
        job_title=employee.job_title,
        salary=employee.salary,
        department=employee.department,
        role=employee.role,
        version=employee.version,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/employees", response_model=EmployeesListRes, tags=["employees"])
def list_employees(
    use_case: ListEmployeesUseCase = Depends(get_list_employees_use_case),
    principal: Principal = Depends(require_principal()),
):
    result = use_case.execute(_to_actor(principal))
    if result.error is not None:
        raise_employee_error(result.error)

    return EmployeesListRes(
        employees=[_to_employee_res(e) for e in result.employees]
    )


@router.get(
    "/employees/{employee_id}", response_model=EmployeeRes, tags=["employees"]
)
def get_employee(
    employee_id: int,
    use_case: GetEmployeeUseCase = Depends(get_get_employee_use_case),
    principal: Principal = Depends(require_principal()),
):
    result = use_case.execute(employee_id, _to_actor(principal))
    if result.error is not None:
        raise_employee_error(result.error, employee_id=employee_id)
    if result.employee is None:
        raise internal_error("El caso de uso no devolvió empleado")

    return _to_employee_res(result.employee)


@router.post(
    "/employees",
    response_model=EmployeeRes,
    status_code=201,
    tags=["employees"],
)
def create_employee(
    req: CreateEmployeeReq,
    use_case: CreateEmployeeUseCase = Depends(get_create_employee_use_case),
    principal: Principal = Depends(_require_directory_editor),
):
    result = use_case.execute(
        _to_input(req, password=req.password), _to_actor(principal)
    )
    if result.error is not None:
        raise_employee_error(result.error)
    if result.employee is None:
        raise internal_error("El caso de uso no devolvió empleado")

    return _to_employee_res(result.employee)


@router.put(
    "/employees/{employee_id}",
    response_model=UpdateEmployeeRes,
    tags=["employees"],
)
def update_employee(
    employee_id: int,
    req: UpdateEmployeeReq,
    response: Response,
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    principal: Principal = Depends(_require_directory_editor),
):
    result = use_case.execute(employee_id, _to_input(req), _to_actor(principal))
    if result.error is not None:
        raise_employee_error(result.error, employee_id=employee_id)
    if result.employee is None:
        raise internal_error("El caso de uso no devolvió empleado")

    session = None
    if result.claims_refresh is not None:
        session = session_issuer.install(
            result.claims_refresh.username, result.claims_refresh.role
        )
        set_auth_cookie(response, session.access_token, session.expires_in)
        logger.info(
            "Claims de sesión refrescados",
            extra={
                "username": result.claims_refresh.username,
                "role": result.claims_refresh.role.value,
            },
        )

    return UpdateEmployeeRes(
        employee=_to_employee_res(result.employee),
        user=(
            SyncedUserRes(
                username=result.user.username,
                email=result.user.email,
                role=result.user.role,
            )
            if result.user is not None
            else None
        ),
        session_refreshed=session is not None,
        access_token=session.access_token if session else None,
        token_type="bearer" if session else None,
        expires_in=session.expires_in if session else None,
    )


@router.delete(
    "/employees/{employee_id}",
    status_code=204,
    response_class=Response,
    tags=["employees"],
)
def delete_employee(
    employee_id: int,
    use_case: DeleteEmployeeUseCase = Depends(get_delete_employee_use_case),
    principal: Principal = Depends(_require_directory_editor),
):
    result = use_case.execute(employee_id, _to_actor(principal))
    if result.error is not None:
        raise_employee_error(result.error, employee_id=employee_id)

    return Response(status_code=204)
