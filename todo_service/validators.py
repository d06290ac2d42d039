"""
Input validation for register and todo payloads.

Each helper returns the normalised value or raises a BAD_REQUEST
``AppError`` whose message is surfaced to the client verbatim.
"""
from .errors import AppError

MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    email = normalize_email(email)
    local, sep, domain = email.rpartition("@")
    if not sep or not local or any(ch.isspace() for ch in email):
        raise AppError.bad_request("Invalid email")
    # domain must contain a dot between two non-empty labels
    if "." not in domain.strip("."):
        raise AppError.bad_request("Invalid email")
    return email


def validate_password(password: str) -> str:
    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise AppError.bad_request(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


def validate_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise AppError.bad_request("Title must not be empty")
    return title
