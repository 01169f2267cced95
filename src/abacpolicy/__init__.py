"""abacpolicy - Attribute-based access control evaluator."""

from abacpolicy.core.config import Settings
from abacpolicy.core.exceptions import AbacPolicyError, ConfigurationError
from abacpolicy.policy import (
    PolicyEvaluator,
    PolicyRule,
    PolicyStore,
    PolicyStoreBuilder,
    ResourceAttributes,
    UserAttributes,
)

__version__ = "1.0.0"
__all__ = [
    "Settings",
    "AbacPolicyError",
    "ConfigurationError",
    "PolicyEvaluator",
    "PolicyRule",
    "PolicyStore",
    "PolicyStoreBuilder",
    "ResourceAttributes",
    "UserAttributes",
    "__version__",
]
