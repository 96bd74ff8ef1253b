"""
Role-based permission helpers for LogiTrack.

Defines roles and the capability table every endpoint consults. The same
table drives which resources the client's global search may query.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from logitrack.errors import Forbidden
from logitrack.models.enums import UserRole


# Define role hierarchy
class Roles:
    """Standard roles in LogiTrack."""
    SUPERADMIN = UserRole.SUPERADMIN
    ADMIN = UserRole.ADMIN
    DISPATCHER = UserRole.DISPATCHER
    DRIVER = UserRole.DRIVER

    # All roles list for validation
    ALL = [SUPERADMIN, ADMIN, DISPATCHER, DRIVER]

    # Roles that belong to a tenant
    TENANT = [ADMIN, DISPATCHER, DRIVER]


class Resource(str, Enum):
    SHIPMENTS = "shipments"
    VEHICLES = "vehicles"
    DRIVERS = "drivers"
    EMPLOYEES = "employees"
    EXPENSES = "expenses"
    USERS = "users"
    REPORTS = "reports"


class Action(str, Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ALL_ACTIONS: FrozenSet[Action] = frozenset(Action)
READ_ONLY: FrozenSet[Action] = frozenset({Action.LIST, Action.READ})
REPORT_ONLY: FrozenSet[Action] = frozenset({Action.READ})
NONE: FrozenSet[Action] = frozenset()

_FULL_ACCESS: Dict[Resource, FrozenSet[Action]] = {
    Resource.SHIPMENTS: ALL_ACTIONS,
    Resource.VEHICLES: ALL_ACTIONS,
    Resource.DRIVERS: ALL_ACTIONS,
    Resource.EMPLOYEES: ALL_ACTIONS,
    Resource.EXPENSES: ALL_ACTIONS,
    Resource.USERS: ALL_ACTIONS,
    Resource.REPORTS: REPORT_ONLY,
}

# Role capabilities matrix
# superadmin/admin: full access, reports are read-only by nature
# dispatcher: runs daily operations, cannot delete or manage users
# driver: sees the fleet and its own shipments
POLICY: Dict[UserRole, Dict[Resource, FrozenSet[Action]]] = {
    UserRole.SUPERADMIN: _FULL_ACCESS,
    UserRole.ADMIN: _FULL_ACCESS,
    UserRole.DISPATCHER: {
        Resource.SHIPMENTS: frozenset({Action.LIST, Action.READ, Action.CREATE, Action.UPDATE}),
        Resource.VEHICLES: frozenset({Action.LIST, Action.READ, Action.CREATE, Action.UPDATE}),
        Resource.DRIVERS: frozenset({Action.LIST, Action.READ, Action.UPDATE}),
        Resource.EMPLOYEES: READ_ONLY,
        Resource.EXPENSES: frozenset({Action.LIST, Action.READ, Action.CREATE}),
        Resource.USERS: NONE,
        Resource.REPORTS: REPORT_ONLY,
    },
    UserRole.DRIVER: {
        Resource.SHIPMENTS: READ_ONLY,
        Resource.VEHICLES: READ_ONLY,
        Resource.DRIVERS: READ_ONLY,
        Resource.EMPLOYEES: NONE,
        Resource.EXPENSES: NONE,
        Resource.USERS: NONE,
        Resource.REPORTS: NONE,
    },
}


def _as_role(role: Union[UserRole, str, None]) -> Union[UserRole, None]:
    if role is None:
        return None
    try:
        return UserRole(role)
    except ValueError:
        return None


def can(role: Union[UserRole, str, None], resource: Resource, action: Action) -> bool:
    """
    Check if a role may perform an action on a resource.

    Unknown roles have no capabilities.
    """
    user_role = _as_role(role)
    if user_role is None:
        return False
    return action in POLICY.get(user_role, {}).get(resource, NONE)


def raise_if_cannot(role: Union[UserRole, str, None], resource: Resource, action: Action) -> None:
    """
    Raise Forbidden if the role lacks the capability.

    Raises:
        Forbidden: 403 if the role may not perform the action
    """
    if not can(role, resource, action):
        role_name = getattr(role, "value", role)
        raise Forbidden(
            f"Role {role_name} cannot {action.value} {resource.value}",
            details={"resource": resource.value, "action": action.value},
        )


def check_is_superadmin(role: Union[UserRole, str, None]) -> bool:
    """Check if user is a platform superadmin."""
    return _as_role(role) == UserRole.SUPERADMIN
