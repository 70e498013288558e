from unittest.mock import patch

from login_service.adapter.services.password_hasher import BcryptPasswordHasher, DEFAULT_ROUNDS


def test_hash_then_verify(hasher):
    password_hash = hasher.hash("secret1")

    assert password_hash != "secret1"
    assert hasher.verify("secret1", password_hash)


def test_verify_rejects_other_passwords(hasher):
    password_hash = hasher.hash("secret1")

    assert not hasher.verify("secret2", password_hash)
    assert not hasher.verify("Secret1", password_hash)
    assert not hasher.verify("secret1 ", password_hash)


def test_hash_is_salted(hasher):
    assert hasher.hash("secret1") != hasher.hash("secret1")


def test_cost_factor_in_hash():
    assert DEFAULT_ROUNDS == 10
    assert BcryptPasswordHasher(rounds=5).hash("secret1").startswith("$2b$05$")


def test_verify_dummy_never_raises(hasher):
    hasher.verify_dummy("anything")
    hasher.verify_dummy("dummy_password")


def test_verify_dummy_does_not_hash(hasher):
    """The dummy hash exists before the first unknown-email login"""
    with patch.object(hasher, "hash") as hash_mock, patch.object(
        hasher, "verify", wraps=hasher.verify
    ) as verify_mock:
        hasher.verify_dummy("anything")
        hasher.verify_dummy("anything")

    hash_mock.assert_not_called()
    assert verify_mock.call_count == 2
