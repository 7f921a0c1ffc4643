"""Test inputs, built once per run and handed to tests through fixtures."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class LoginCase:
    name: str
    credentials: Credentials
    expected_error: str


@dataclass(frozen=True)
class SearchInputs:
    exact_username: str = "Admin"
    lowercase_username: str = "admin"
    partial_username: str = "Adm"
    unknown_username: str = "nonexistentuser"
    special_chars: str = "Admin@123"
    long_text: str = "A" * 100
    padded_username: str = "  Admin  "
    whitespace_only: str = "   "
    sql_injection: str = "'; DROP TABLE users; --"
    xss_payload: str = '<script>alert("xss")</script>'
    unicode_username: str = "Admín"
    employee_prefixes: tuple[str, ...] = ("A", "Ad", "Adm")
    unknown_employee: str = "NonExistentUser"
    invalid_employees: tuple[str, ...] = (
        "Employee@#$%",
        "Admín Usér",
        "'; DROP TABLE users; --",
        '<script>alert("xss")</script>',
    )
    user_roles: tuple[str, ...] = ("Admin", "ESS")
    statuses: tuple[str, ...] = ("Enabled", "Disabled")


SEARCH_INPUTS = SearchInputs()


def admin_credentials(settings: Settings) -> Credentials:
    return Credentials(settings.admin_username, settings.admin_password)


def invalid_login_cases(settings: Settings) -> tuple[LoginCase, ...]:
    user, password = settings.admin_username, settings.admin_password
    return (
        LoginCase("wrong-username", Credentials("wronguser", password), "Invalid credentials"),
        LoginCase("wrong-password", Credentials(user, "wrongpassword"), "Invalid credentials"),
        LoginCase("empty-username", Credentials("", password), "Required"),
        LoginCase("empty-password", Credentials(user, ""), "Required"),
        LoginCase("both-empty", Credentials("", ""), "Required"),
        LoginCase("long-username", Credentials("a" * 1000, password), "Invalid credentials"),
        LoginCase("whitespace-username", Credentials("   ", password), "Required"),
        LoginCase(
            "xss-username",
            Credentials('<script>alert("xss")</script>', password),
            "Invalid credentials",
        ),
        LoginCase(
            "sql-username", Credentials(f"{user}; DROP TABLE users; --", password), "Invalid credentials"
        ),
    )
