"""Unit tests for authorization error types."""

import pytest

from gatekeeper.core.errors import (
    NotFoundError,
    PermissionCheckError,
    ValidationError,
)
from gatekeeper.core.permissions.schemas import AuthFailure


pytestmark = pytest.mark.unit


class TestPermissionCheckError:
    """Tests for PermissionCheckError."""

    @pytest.mark.parametrize("status", [401, 403, 500])
    def test_status_follows_failure(self, status: int):
        failure = AuthFailure(status=status, message="nope")
        exc = PermissionCheckError(failure)

        assert exc.status_code == status
        assert exc.message == "nope"
        assert exc.failure is failure
        assert exc.error_code == "permission_check_failed"

    def test_failure_rejects_other_statuses(self):
        with pytest.raises(ValueError):
            AuthFailure(status=404, message="nope")


class TestDomainErrors:
    """Tests for details carried by domain errors."""

    def test_validation_error_collects_errors(self):
        exc = ValidationError(
            "Invalid permission catalog",
            errors=[{"field": "permissions", "message": "Empty segment"}],
        )

        assert exc.status_code == 422
        assert exc.details["errors"][0]["field"] == "permissions"

    def test_not_found_error_details(self):
        exc = NotFoundError("Role not found", resource="role", resource_id="admin")

        assert exc.status_code == 404
        assert exc.details == {"resource": "role", "resource_id": "admin"}
