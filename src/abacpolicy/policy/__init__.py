"""Policy models, storage and evaluation."""

from abacpolicy.policy.defaults import DEFAULT_POLICIES, default_policies
from abacpolicy.policy.evaluator import PolicyEvaluator, rule_matches
from abacpolicy.policy.loader import PolicyLoader
from abacpolicy.policy.models import PolicyRule, ResourceAttributes, UserAttributes
from abacpolicy.policy.store import (
    PolicyOption,
    PolicyStore,
    PolicyStoreBuilder,
    new_policy_store,
    with_default_policies,
    with_policies,
    with_policies_from_file,
)

__all__ = [
    "DEFAULT_POLICIES",
    "default_policies",
    "PolicyEvaluator",
    "rule_matches",
    "PolicyLoader",
    "PolicyRule",
    "ResourceAttributes",
    "UserAttributes",
    "PolicyOption",
    "PolicyStore",
    "PolicyStoreBuilder",
    "new_policy_store",
    "with_default_policies",
    "with_policies",
    "with_policies_from_file",
]
