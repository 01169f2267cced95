"""Immutable policy store and its builder."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any, overload

from abacpolicy.core.config import Settings
from abacpolicy.observability.logging import get_logger
from abacpolicy.observability.metrics import get_metrics_collector
from abacpolicy.policy.defaults import default_policies
from abacpolicy.policy.loader import PolicyLoader
from abacpolicy.policy.models import PolicyRule

logger = get_logger(__name__)


class PolicyStore:
    """
    Ordered, read-only collection of policy rules.

    Built once by PolicyStoreBuilder and never mutated afterwards, so a
    single store can be shared by concurrent evaluators without locking.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: tuple[PolicyRule, ...] = ()) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[PolicyRule, ...]:
        """The rules in the order they were added."""
        return self._rules

    @property
    def is_empty(self) -> bool:
        return not self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[PolicyRule]:
        return iter(self._rules)

    @overload
    def __getitem__(self, index: int) -> PolicyRule: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PolicyRule, ...]: ...

    def __getitem__(self, index: int | slice) -> PolicyRule | tuple[PolicyRule, ...]:
        return self._rules[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolicyStore):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"PolicyStore({len(self._rules)} rules)"


PolicyOption = Callable[["PolicyStoreBuilder"], None]


class PolicyStoreBuilder:
    """
    Accumulates policies from several sources, in the order applied.

    Example:
        store = (
            PolicyStoreBuilder()
            .with_default_policies()
            .with_policies_from_file("policies.json")
            .build()
        )
    """

    def __init__(self, loader: PolicyLoader | None = None) -> None:
        self._loader = loader or PolicyLoader()
        self._rules: list[PolicyRule] = []
        self._sources: dict[str, int] = {}

    def with_policies(
        self,
        *policies: PolicyRule | Mapping[str, Any],
    ) -> PolicyStoreBuilder:
        """
        Append literal policies.

        Args:
            *policies: Rules, or mappings in the policy document shape.

        Raises:
            ValidationError: If a mapping does not describe a rule.
        """
        rules = [
            p if isinstance(p, PolicyRule) else self._loader.load_dict(p, index)
            for index, p in enumerate(policies)
        ]
        return self._append("literal", rules)

    def with_default_policies(self) -> PolicyStoreBuilder:
        """Append the built-in default policies."""
        return self._append("defaults", default_policies())

    def with_policies_from_file(self, path: str | Path) -> PolicyStoreBuilder:
        """
        Append policies loaded from a policy document.

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed.
        """
        rules = self._loader.load_file(path)
        return self._append(f"file:{path}", rules)

    def with_policies_from_string(
        self,
        content: str,
        format_hint: str = ".json",
    ) -> PolicyStoreBuilder:
        """
        Append policies parsed from an in-memory document.

        Raises:
            ConfigurationError: If the content is malformed.
        """
        rules = self._loader.load_string(content, format_hint)
        return self._append("string", rules)

    def apply(self, *options: PolicyOption) -> PolicyStoreBuilder:
        """Apply options in order."""
        for option in options:
            option(self)
        return self

    def build(self) -> PolicyStore:
        """Build an immutable store from the accumulated policies."""
        store = PolicyStore(tuple(self._rules))

        metrics = get_metrics_collector()
        for source, count in self._sources.items():
            metrics.set_policies_loaded(source, count)

        logger.info(
            "Built policy store",
            policies=len(store),
            sources=list(self._sources),
        )
        return store

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        loader: PolicyLoader | None = None,
    ) -> PolicyStoreBuilder:
        """
        Create a builder populated from settings.

        Defaults come first when enabled, followed by each configured
        policy file in order.
        """
        builder = cls(loader=loader)
        if settings.policy.include_defaults:
            builder.with_default_policies()
        for path in settings.policy.files:
            builder.with_policies_from_file(path)
        return builder

    def _append(self, source: str, rules: list[PolicyRule]) -> PolicyStoreBuilder:
        self._rules.extend(rules)
        self._sources[source] = self._sources.get(source, 0) + len(rules)
        logger.info("Added policies", source=source, count=len(rules))
        return self


def with_policies(*policies: PolicyRule | Mapping[str, Any]) -> PolicyOption:
    """Option that appends literal policies."""
    return lambda builder: builder.with_policies(*policies)


def with_default_policies() -> PolicyOption:
    """Option that appends the built-in default policies."""
    return lambda builder: builder.with_default_policies()


def with_policies_from_file(path: str | Path) -> PolicyOption:
    """Option that appends policies loaded from a file."""
    return lambda builder: builder.with_policies_from_file(path)


def new_policy_store(*options: PolicyOption) -> PolicyStore:
    """
    Build a store by applying options to a fresh builder, in order.

    Raises:
        ConfigurationError: If any option fails to load its policies.
    """
    return PolicyStoreBuilder().apply(*options).build()
