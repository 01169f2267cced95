"""Core module for abacpolicy."""

from abacpolicy.core.config import Settings, get_settings
from abacpolicy.core.exceptions import (
    AbacPolicyError,
    AuthorizationError,
    ConfigurationError,
    PolicyEvaluationError,
    ValidationError,
)

__all__ = [
    "Settings",
    "get_settings",
    "AbacPolicyError",
    "AuthorizationError",
    "ConfigurationError",
    "PolicyEvaluationError",
    "ValidationError",
]
