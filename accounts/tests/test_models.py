"""Tests for accounts models and RBAC logic."""

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.test import RequestFactory

from accounts.mixins import role_required
from accounts.models import Role

User = get_user_model()


@pytest.mark.django_db
class TestUserModel:
    def test_user_str_includes_role_display(self):
        user = User(username="test", first_name="Kovács", last_name="Anna", role=Role.OPERATOR)
        assert "Gépkezelő" in str(user)

    def test_default_role_is_sales(self):
        user = User.objects.create_user(username="newuser", password="pass")
        assert user.role == Role.SALES


@pytest.mark.django_db
class TestRoleRequired:
    def _view(self):
        @role_required(Role.WAREHOUSE)
        def view(request):
            return "ok"

        return view

    def test_matching_role_passes(self, warehouse_user):
        request = RequestFactory().get("/")
        request.user = warehouse_user
        assert self._view()(request) == "ok"

    def test_owner_always_passes(self, owner_user):
        request = RequestFactory().get("/")
        request.user = owner_user
        assert self._view()(request) == "ok"

    def test_other_role_is_denied(self, sales_user):
        request = RequestFactory().get("/")
        request.user = sales_user
        with pytest.raises(PermissionDenied):
            self._view()(request)
