"""
Employee router - API endpoints for employees.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, require_permission
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.models.enums import EmployeeRole
from logitrack.schemas.base import Page
from logitrack.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from logitrack.services.employee_service import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["Employees"])


@router.get("", response_model=Page[EmployeeRead])
async def list_employees(
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    role: Optional[EmployeeRole] = None,
):
    """List employees; search matches name, email and phone."""
    items, total = await EmployeeService(db).list_employees(ctx.tenant_id, params, role=role)
    return build_page(EmployeeRead, items, total, params)


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService(db).get_employee(ctx.tenant_id, employee_id)


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService(db).create_employee(ctx.tenant_id, data)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def replace_employee(
    employee_id: UUID,
    data: EmployeeCreate,
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService(db).update_employee(ctx.tenant_id, employee_id, data.model_dump())


@router.patch("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService(db).update_employee(
        ctx.tenant_id, employee_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.EMPLOYEES, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    await EmployeeService(db).delete_employee(ctx.tenant_id, employee_id)
