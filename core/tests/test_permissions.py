from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser

from core.api.permissions import IsAdmin, IsStaff, RoleAllowed


def _user(role, authenticated=True):
    return SimpleNamespace(role=role, is_authenticated=authenticated, is_active=True)


def _request(api_rf, user, method="get"):
    request = getattr(api_rf, method)("/")
    request.user = user
    return request


@pytest.mark.parametrize("role,expected", [("ADMIN", True), ("STAFF", False), ("USER", False)])
def test_is_admin(api_rf, role, expected):
    assert IsAdmin().has_permission(_request(api_rf, _user(role)), None) is expected


@pytest.mark.parametrize("role,expected", [("ADMIN", True), ("STAFF", True), ("USER", False)])
def test_is_staff_includes_admin(api_rf, role, expected):
    assert IsStaff().has_permission(_request(api_rf, _user(role)), None) is expected


def test_anonymous_is_rejected(api_rf):
    request = _request(api_rf, AnonymousUser())
    assert IsStaff().has_permission(request, None) is False
    assert IsAdmin().has_permission(request, None) is False


def test_role_allowed_uses_view_roles(api_rf):
    view = SimpleNamespace(required_roles={"USER", "STAFF"})
    assert RoleAllowed().has_permission(_request(api_rf, _user("USER")), view) is True
    assert RoleAllowed().has_permission(_request(api_rf, _user("ADMIN")), view) is False


def test_role_allowed_rejects_unknown_roles(api_rf):
    view = SimpleNamespace(required_roles={"VIP"})
    assert RoleAllowed().has_permission(_request(api_rf, _user("USER")), view) is False


def test_role_allowed_without_roles_allows_authenticated(api_rf):
    view = SimpleNamespace()
    assert RoleAllowed().has_permission(_request(api_rf, _user("USER")), view) is True
