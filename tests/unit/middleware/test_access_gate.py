from uuid import uuid4

import pytest

from pawmarket.api.core.middleware.access_gate import should_block
from pawmarket.database.models import User, UserStatus
from pawmarket.utils.settings.access_gate import AccessGateSettings


def make_user(status: UserStatus, email: str = "someone@mypaws.in") -> User:
    return User(id=uuid4(), email=email, status=status)


@pytest.fixture
def gate_settings() -> AccessGateSettings:
    return AccessGateSettings(ACCESS_GATE_BYPASS_EMAILS=[], ACCESS_GATE_BYPASS_USER_IDS=[])


@pytest.mark.parametrize("status", [UserStatus.SUSPENDED, UserStatus.BANNED])
def test_blocked_statuses_are_stopped(gate_settings, status):
    assert should_block(make_user(status), "/api/v1/adoption-listings", gate_settings)


def test_active_and_anonymous_pass(gate_settings):
    assert not should_block(make_user(UserStatus.ACTIVE), "/api/v1/favorites", gate_settings)
    assert not should_block(None, "/api/v1/favorites", gate_settings)


@pytest.mark.parametrize(
    "path",
    ["/api/v1/auth/logout", "/api/v1/auth/refresh", "/api/v1/auth/mock"],
)
def test_exempt_paths_pass(gate_settings, path):
    assert not should_block(make_user(UserStatus.SUSPENDED), path, gate_settings)


def test_exempt_prefix_matches_whole_segments(gate_settings):
    user = make_user(UserStatus.SUSPENDED)
    assert should_block(user, "/api/v1/auth/logoutx", gate_settings)
    assert should_block(user, "/api/v1/auth/me", gate_settings)


def test_bypass_identities_pass():
    user = make_user(UserStatus.BANNED, email="Ops@MyPaws.in")
    by_email = AccessGateSettings(ACCESS_GATE_BYPASS_EMAILS=["ops@mypaws.in"])
    by_id = AccessGateSettings(ACCESS_GATE_BYPASS_USER_IDS=[user.id])

    assert not should_block(user, "/api/v1/favorites", by_email)
    assert not should_block(user, "/api/v1/favorites", by_id)
