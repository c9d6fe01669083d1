"""Tests for domain exceptions, value objects, entities and settings validation."""

from datetime import timedelta

import pytest

from app.core.config import Settings
from app.core.exception_handlers import status_for_error_code
from app.domain.entities.space import AccessTokenEntity, SpaceAccessConfig
from app.domain.enums import AccessMode, DenialReason, SpaceStatus
from app.domain.exceptions import (
    AuthorizationException,
    EncryptionIntegrityException,
    InvalidTransitionException,
    PortalException,
    ResourceNotFoundException,
    SpaceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import VisitorIdentity, normalize_email
from app.shared.utils.datetime import utc_now


def test_portal_exception_defaults() -> None:
    exc = PortalException("Something failed")
    assert exc.error_code == "PortalException"
    assert exc.to_dict() == {
        "error": "PortalException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception_field() -> None:
    exc = ValidationException("Email is required", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_authorization_exception_message() -> None:
    exc = AuthorizationException("integration", "manage")
    assert exc.message == "Permission denied: manage on integration"
    assert exc.details == {"resource": "integration", "action": "manage"}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (SpaceNotFoundException("s1"), 404),
        (ResourceNotFoundException("space_member", "m1"), 404),
        (ValidationException("bad"), 400),
        (AuthorizationException(), 403),
        (InvalidTransitionException("draft", "completed"), 409),
        (EncryptionIntegrityException(), 500),
    ],
)
def test_error_codes_map_to_http_status(exc: PortalException, status: int) -> None:
    assert status_for_error_code(exc.error_code) == status


def test_denial_reason_lifecycle_flag() -> None:
    lifecycle = {r for r in DenialReason if r.is_lifecycle}
    assert lifecycle == {DenialReason.SPACE_NOT_READY, DenialReason.SPACE_UNAVAILABLE}


def test_normalize_email() -> None:
    assert normalize_email("  Casey@Globex.COM ") == "casey@globex.com"
    assert normalize_email("   ") is None
    assert normalize_email(None) is None


def test_visitor_identity() -> None:
    assert VisitorIdentity.from_email(None).is_anonymous
    assert str(VisitorIdentity.from_email(" A@X.com")) == "a@x.com"
    with pytest.raises(ValueError):
        VisitorIdentity("Mixed@Case.com")


def test_space_access_config_rejects_blank_hash() -> None:
    with pytest.raises(ValidationException):
        SpaceAccessConfig(
            space_id="s1",
            organization_id="o1",
            access_mode=AccessMode.PUBLIC,
            status=SpaceStatus.ACTIVE,
            password_hash="  ",
        )


def test_access_token_redeemable_window() -> None:
    now = utc_now()
    token = AccessTokenEntity(
        id="t1", space_id="s1", email="a@x.com", expires_at=now + timedelta(days=7)
    )
    assert token.is_redeemable(now)
    assert not token.is_redeemable(now + timedelta(days=7))
    used = AccessTokenEntity(
        id="t1", space_id="s1", email="a@x.com", expires_at=token.expires_at, used_at=now
    )
    assert not used.is_redeemable(now)


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "secret_key": "s" * 32,
        "portal_session_secret": "p" * 32,
        "credential_encryption_key": "k" * 32,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_settings_defaults() -> None:
    settings = _settings()
    assert settings.deployment_profile == "production"
    assert settings.magic_link_ttl_days == 7
    assert settings.notification_window_minutes == 5
    assert settings.mask_restricted_membership is False


@pytest.mark.parametrize("missing", ["database_url", "secret_key", "portal_session_secret"])
def test_settings_require_core_values(missing: str) -> None:
    with pytest.raises(ValueError):
        _settings(**{missing: ""})


def test_short_credential_key_rejected_in_production() -> None:
    with pytest.raises(ValueError):
        _settings(credential_encryption_key="short")


def test_short_credential_key_allowed_in_development() -> None:
    settings = _settings(deployment_profile="development", credential_encryption_key="short")
    assert settings.is_development


def test_resend_backend_requires_api_key() -> None:
    with pytest.raises(ValueError):
        _settings(email_backend="resend")
