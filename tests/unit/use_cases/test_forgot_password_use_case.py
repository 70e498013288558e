"""
Unit tests for ForgotPasswordUseCase

Tests all business logic with mocked dependencies.
"""
import hashlib
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from login_service.app.use_cases.auth import ForgotPasswordUseCase
from login_service.domain import messages
from login_service.domain.entities import User

RESET_URL = "http://localhost:3000/account/reset-password"
NOW = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.send_reset_link = AsyncMock()
    return notifier


@pytest.fixture
def user():
    return User(name="A", email="a@x.com", password_hash="hash")


def make_use_case(uow, notifier):
    return ForgotPasswordUseCase(uow, notifier, reset_url=RESET_URL, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_registered_email_issues_token_and_sends_link(mock_uow, notifier, user):
    mock_uow.users.get_by_email.return_value = user

    result = await make_use_case(mock_uow, notifier).execute("a@x.com")

    assert result.is_ok()
    assert result.value.message == messages.RESET_LINK_SENT

    # Digest stored, expiring in one hour
    mock_uow.users.update_reset_token.assert_called_once()
    user_id, token_hash, expires_at = mock_uow.users.update_reset_token.call_args.args
    assert user_id == user.id
    assert expires_at == NOW + timedelta(hours=1)
    mock_uow.commit.assert_called_once()

    # Link carries the plain token, whose digest is what was stored
    email, link = notifier.send_reset_link.call_args.args
    assert email == "a@x.com"
    assert link.startswith(RESET_URL + "?")
    token = parse_qs(urlparse(link).query)["token"][0]
    assert hashlib.sha256(token.encode()).hexdigest() == token_hash
    assert token != token_hash


@pytest.mark.asyncio
async def test_unregistered_email_gets_same_response(mock_uow, notifier, user):
    """No email enumeration - identical response, but no token and no link"""
    mock_uow.users.get_by_email.return_value = user
    registered = await make_use_case(mock_uow, notifier).execute("a@x.com")

    mock_uow.reset_mock()
    notifier.send_reset_link.reset_mock()
    mock_uow.users.get_by_email.return_value = None
    unregistered = await make_use_case(mock_uow, notifier).execute("nobody@x.com")

    assert unregistered.is_ok()
    assert unregistered.value == registered.value
    mock_uow.users.update_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()
    notifier.send_reset_link.assert_not_called()


@pytest.mark.asyncio
async def test_each_request_issues_a_fresh_token(mock_uow, notifier, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = make_use_case(mock_uow, notifier)

    await use_case.execute("a@x.com")
    await use_case.execute("a@x.com")

    first, second = [c.args[1] for c in mock_uow.users.update_reset_token.call_args_list]
    assert first != second


@pytest.mark.asyncio
async def test_missing_email(mock_uow, notifier):
    result = await make_use_case(mock_uow, notifier).execute("")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == messages.EMAIL_REQUIRED
    mock_uow.users.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_delivery_failure_does_not_change_response(mock_uow, notifier, user):
    mock_uow.users.get_by_email.return_value = user
    notifier.send_reset_link.side_effect = ConnectionError("smtp down")

    result = await make_use_case(mock_uow, notifier).execute("a@x.com")

    assert result.is_ok()
    assert result.value.message == messages.RESET_LINK_SENT


@pytest.mark.asyncio
async def test_failed_commit_sends_nothing(mock_uow, notifier, user):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.commit.side_effect = OSError("write failed")

    result = await make_use_case(mock_uow, notifier).execute("a@x.com")

    assert result.is_err()
    assert result.error.code == "INTERNAL_ERROR"
    notifier.send_reset_link.assert_not_called()
