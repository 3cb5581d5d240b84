"""Tests for IdentityManager"""

import pytest

from nexus_client.infrastructure.http.auth import IdentityManager
from nexus_client.shared.exceptions import ValidationError


@pytest.mark.unit
def test_starts_with_api_key():
    identity = IdentityManager("npr_key")

    assert identity.current == "npr_key"
    assert identity.is_session is False
    assert identity.authorization_header() == {"Authorization": "Bearer npr_key"}


@pytest.mark.unit
def test_set_identity_replaces_bearer():
    identity = IdentityManager("npr_key")

    identity.set_identity("session-1")

    assert identity.current == "session-1"
    assert identity.is_session is True


@pytest.mark.unit
def test_set_identity_twice_keeps_latest_only():
    """Test that identities do not stack"""
    identity = IdentityManager("npr_key")

    identity.set_identity("session-1")
    identity.set_identity("session-2")
    identity.clear_identity()

    assert identity.current == "npr_key"


@pytest.mark.unit
def test_clear_identity_restores_api_key():
    identity = IdentityManager("npr_key")
    identity.set_identity("session-1")

    identity.clear_identity()

    assert identity.current == "npr_key"
    assert identity.authorization_header() == {"Authorization": "Bearer npr_key"}


@pytest.mark.unit
def test_set_empty_identity_raises_validation_error():
    identity = IdentityManager("npr_key")

    with pytest.raises(ValidationError) as exc_info:
        identity.set_identity("")

    assert exc_info.value.code == "INVALID_TOKEN"
    assert identity.current == "npr_key"
