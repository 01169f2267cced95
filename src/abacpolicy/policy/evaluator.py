"""Attribute-based access evaluation over a policy store."""

from __future__ import annotations

from collections.abc import Iterable

from abacpolicy.core.exceptions import AuthorizationError, PolicyEvaluationError
from abacpolicy.observability.logging import get_logger
from abacpolicy.observability.metrics import MetricsCollector, get_metrics_collector
from abacpolicy.policy.models import (
    WILDCARDS,
    PolicyRule,
    ResourceAttributes,
    UserAttributes,
)
from abacpolicy.policy.store import PolicyStore

logger = get_logger(__name__)


def matches_value(pattern: str, value: str) -> bool:
    """Check if a single value matches a pattern or wildcard."""
    return pattern in WILDCARDS or pattern == value


def matches_any(pattern: str, values: Iterable[str]) -> bool:
    """Check if any of the values matches a pattern or wildcard."""
    if pattern in WILDCARDS:
        return True
    return pattern in values


def rule_matches(
    rule: PolicyRule,
    user: UserAttributes,
    resource: ResourceAttributes,
) -> bool:
    """
    Check if a rule matches the request attributes.

    All fields must match. Non-resource paths are compared against the
    resource name; only exact or wildcard patterns are supported.
    """
    return (
        rule.read_only == resource.read_only
        and matches_any(rule.role, user.roles)
        and matches_value(rule.user, user.user_id)
        and matches_value(rule.group, user.group_id)
        and matches_value(rule.resource, resource.resource)
        and matches_value(rule.namespace, resource.namespace)
        # TODO: support "/foo/*" subpath patterns once requests carry a real path
        and matches_value(rule.non_resource_path, resource.resource)
    )


class PolicyEvaluator:
    """
    ABAC policy evaluator.

    Access is granted when any rule in the store matches the request.
    There are no deny rules, so an empty store denies everything.
    """

    def __init__(
        self,
        store: PolicyStore,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._store = store
        self._metrics = metrics or get_metrics_collector()

    @property
    def store(self) -> PolicyStore:
        return self._store

    def find_match(
        self,
        user: UserAttributes,
        resource: ResourceAttributes,
    ) -> PolicyRule | None:
        """
        Find the first rule that matches the request.

        Args:
            user: Attributes of the requesting user.
            resource: Attributes of the requested resource.

        Returns:
            The first matching rule, or None.

        Raises:
            PolicyEvaluationError: If either attribute set is missing.
        """
        if user is None or resource is None:
            raise PolicyEvaluationError(
                "Both user and resource attributes are required"
            )

        for rule in self._store:
            if rule_matches(rule, user, resource):
                return rule
        return None

    def evaluate(self, user: UserAttributes, resource: ResourceAttributes) -> bool:
        """Check if any policy allows the request."""
        rule = self.find_match(user, resource)
        allowed = rule is not None

        self._metrics.record_evaluation(allowed)
        logger.debug(
            "Evaluated access",
            allowed=allowed,
            user_id=user.user_id,
            resource=resource.resource,
            namespace=resource.namespace,
            read_only=resource.read_only,
        )
        return allowed

    def require(self, user: UserAttributes, resource: ResourceAttributes) -> None:
        """
        Require access, raising if no policy allows it.

        Raises:
            AuthorizationError: If the request is denied.
        """
        if not self.evaluate(user, resource):
            logger.warning(
                "Access denied",
                user_id=user.user_id,
                resource=resource.resource,
                read_only=resource.read_only,
            )
            raise AuthorizationError(
                resource=resource.resource or "*",
                user_id=user.user_id,
                read_only=resource.read_only,
            )
