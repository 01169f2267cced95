"""JSON/YAML loader for policy documents."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from abacpolicy.core.exceptions import ConfigurationError, ValidationError
from abacpolicy.observability.logging import get_logger
from abacpolicy.policy.models import PolicyRule

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class PolicyLoader:
    """
    Loader for policy documents.

    A policy document is an array of rule objects with the keys
    ``role``, ``user``, ``group``, ``resource``, ``namespace``,
    ``readonly`` and ``nonResourcePath``. Every failure is raised as a
    ConfigurationError so callers never continue with a partial set.
    """

    def load_file(self, path: str | Path) -> list[PolicyRule]:
        """
        Load policies from a file.

        Args:
            path: Path to a JSON (or YAML) policy document.

        Returns:
            The rules in document order.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
            ValidationError: If a rule has the wrong shape.
        """
        file_path = Path(path)

        if not file_path.is_file():
            raise ConfigurationError(
                f"Policy file not found: {path}",
                details={"path": str(path)},
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read policy file: {e}",
                details={"path": str(path)},
            ) from e

        logger.debug("Read policy file", path=str(file_path), size=len(content))
        return self.load_string(content, file_path.suffix)

    def load_string(self, content: str, format_hint: str = ".json") -> list[PolicyRule]:
        """
        Load policies from a string.

        Args:
            content: The document content.
            format_hint: File extension hint (".json", ".yaml", ".yml").

        Returns:
            The rules in document order.

        Raises:
            ConfigurationError: If content cannot be parsed or is not an array.
            ValidationError: If a rule has the wrong shape.
        """
        try:
            if format_hint.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (ValueError, RecursionError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to decode policies: {e}") from e

        if not isinstance(data, list):
            raise ConfigurationError(
                "Policy document must be an array of rule objects",
                details={"type": type(data).__name__},
            )

        return self.load_list(data)

    def load_list(self, data: Iterable[Any]) -> list[PolicyRule]:
        """Validate a sequence of raw rule mappings."""
        return [self.load_dict(item, index) for index, item in enumerate(data)]

    def load_dict(self, data: Any, index: int | None = None) -> PolicyRule:
        """
        Validate a single raw rule mapping.

        Raises:
            ValidationError: If the mapping does not describe a rule.
        """
        where = f" at index {index}" if index is not None else ""

        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Policy rule{where} must be an object, got {type(data).__name__}",
                index=index,
            )

        try:
            return PolicyRule.model_validate(dict(data))
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or '<rule>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValidationError(
                f"Invalid policy rule{where}",
                index=index,
                errors=errors,
            ) from e

    def dump_json(self, rules: Iterable[PolicyRule], pretty: bool = True) -> str:
        """
        Dump rules as a policy document.

        Args:
            rules: The rules to serialize.
            pretty: Whether to format with indentation.

        Returns:
            JSON string.
        """
        data = [rule.to_document() for rule in rules]
        if pretty:
            return json.dumps(data, indent=2)
        return json.dumps(data)
