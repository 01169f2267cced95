"""Exception hierarchy for abacpolicy."""

from __future__ import annotations

from typing import Any


class AbacPolicyError(Exception):
    """Base exception for all abacpolicy errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# Configuration Errors
class ConfigurationError(AbacPolicyError):
    """Policy source missing, unreadable or malformed."""

    pass


class ValidationError(ConfigurationError):
    """A policy record does not have the expected shape."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        errors: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if errors:
            details["errors"] = errors
        super().__init__(message, details)
        self.index = index
        self.errors = errors or []


# Evaluation Errors
class PolicyEvaluationError(ValueError):
    """Raised when an evaluation is attempted without request attributes."""


# Security Errors
class SecurityError(AbacPolicyError):
    """Base error for security issues."""

    pass


class AuthorizationError(SecurityError):
    """Authorization denied."""

    def __init__(
        self,
        resource: str,
        user_id: str | None = None,
        read_only: bool | None = None,
    ) -> None:
        details: dict[str, Any] = {"resource": resource}
        if user_id:
            details["user_id"] = user_id
        if read_only is not None:
            details["read_only"] = read_only
        super().__init__(
            f"Access denied: no policy allows access to '{resource}'",
            details,
        )
