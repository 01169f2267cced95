"""Built-in default policies."""

from __future__ import annotations

from abacpolicy.policy.models import PolicyRule

# Anyone may perform read-only requests
ALLOW_READ_ONLY = PolicyRule(
    role="*",
    user="*",
    group="*",
    resource="*",
    namespace="*",
    read_only=True,
    non_resource_path="*",
)

# The admin role may perform write requests
ALLOW_ADMIN_WRITE = PolicyRule(
    role="admin",
    user="*",
    group="*",
    resource="*",
    namespace="*",
    read_only=False,
    non_resource_path="*",
)

DEFAULT_POLICIES: tuple[PolicyRule, ...] = (ALLOW_READ_ONLY, ALLOW_ADMIN_WRITE)


def default_policies() -> list[PolicyRule]:
    """Return the default set of policies."""
    return list(DEFAULT_POLICIES)
