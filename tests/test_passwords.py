"""Tests for password hashing and strength rules."""
import pytest

from surveydesk.utils.passwords import (
    PasswordValidationError,
    hash_password,
    validate_password_strength,
    verify_password,
)


def test_hash_and_verify():
    hashed = hash_password("Correct horse 1")

    assert hashed != "Correct horse 1"
    assert verify_password("Correct horse 1", hashed)
    assert not verify_password("Correct horse 2", hashed)


def test_verify_tolerates_malformed_hash():
    assert verify_password("anything1", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize("password", ["short1", "onlyletters", "1234567890"])
def test_weak_passwords_rejected(password):
    with pytest.raises(PasswordValidationError):
        validate_password_strength(password)


def test_strong_password_accepted():
    validate_password_strength("Survey2025")


def test_password_over_bcrypt_limit_rejected():
    with pytest.raises(PasswordValidationError):
        validate_password_strength("a1" * 37)


def test_multibyte_password_counted_in_bytes():
    # 37 characters, 72 bytes
    validate_password_strength("é" * 35 + "12")

    with pytest.raises(PasswordValidationError):
        validate_password_strength("é" * 36 + "1")
