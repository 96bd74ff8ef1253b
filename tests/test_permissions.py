"""
Unit tests for the role capability table.
"""

import pytest

from logitrack.core.permissions import Action, Resource, can, check_is_superadmin, raise_if_cannot
from logitrack.errors import Forbidden
from logitrack.models.enums import UserRole

pytestmark = pytest.mark.unit


def test_admin_has_full_access():
    for resource in (Resource.SHIPMENTS, Resource.VEHICLES, Resource.DRIVERS, Resource.EMPLOYEES, Resource.EXPENSES):
        for action in Action:
            assert can(UserRole.ADMIN, resource, action)


def test_reports_are_read_only():
    assert can(UserRole.ADMIN, Resource.REPORTS, Action.READ)
    assert not can(UserRole.ADMIN, Resource.REPORTS, Action.DELETE)


def test_dispatcher_capabilities():
    assert can(UserRole.DISPATCHER, Resource.SHIPMENTS, Action.CREATE)
    assert can(UserRole.DISPATCHER, Resource.EMPLOYEES, Action.LIST)
    assert not can(UserRole.DISPATCHER, Resource.SHIPMENTS, Action.DELETE)
    assert not can(UserRole.DISPATCHER, Resource.EMPLOYEES, Action.CREATE)
    assert not can(UserRole.DISPATCHER, Resource.USERS, Action.LIST)


def test_driver_capabilities():
    assert can(UserRole.DRIVER, Resource.SHIPMENTS, Action.LIST)
    assert can(UserRole.DRIVER, Resource.VEHICLES, Action.READ)
    assert not can(UserRole.DRIVER, Resource.EMPLOYEES, Action.LIST)
    assert not can(UserRole.DRIVER, Resource.EXPENSES, Action.LIST)
    assert not can(UserRole.DRIVER, Resource.REPORTS, Action.READ)


def test_roles_accept_plain_strings():
    assert can("ADMIN", Resource.USERS, Action.CREATE)
    assert not can("MANAGER", Resource.SHIPMENTS, Action.LIST)
    assert not can(None, Resource.SHIPMENTS, Action.LIST)


def test_raise_if_cannot_reports_resource_and_action():
    with pytest.raises(Forbidden) as excinfo:
        raise_if_cannot(UserRole.DRIVER, Resource.EXPENSES, Action.LIST)

    assert excinfo.value.status_code == 403
    assert excinfo.value.details == {"resource": "expenses", "action": "list"}


def test_superadmin_check():
    assert check_is_superadmin(UserRole.SUPERADMIN)
    assert check_is_superadmin("SUPERADMIN")
    assert not check_is_superadmin(UserRole.ADMIN)
