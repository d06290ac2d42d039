"""Tests for settings loading."""
import pytest
from pydantic import ValidationError

from todo_service.config import Settings


def test_missing_jwt_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_jwt_secret_fails(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "   ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret-value")
    monkeypatch.delenv("JWT_EXPIRE_HOURS", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.JWT_SECRET == "s3cret-value"
    assert settings.JWT_EXPIRE_HOURS == 24
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.PORT == 3002
