"""Pydantic models for policy rules and request attributes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Pattern values that match any request value
WILDCARDS = frozenset({"*", ""})

_DOCUMENT_KEYS = {
    "role": "role",
    "user": "user",
    "group": "group",
    "resource": "resource",
    "namespace": "namespace",
    "readonly": "readonly",
    "nonresourcepath": "nonResourcePath",
}


class PolicyRule(BaseModel):
    """
    A single declarative access rule.

    Every string field is a pattern: "*" or "" matches anything, any other
    value must equal the request value exactly. ``read_only`` has no
    wildcard and must equal the request's read-only flag.

    Serialized field names follow the policy document format
    (``readonly``, ``nonResourcePath``).
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    role: str = Field(
        default="",
        description='Role the user must hold. "*" matches all roles.',
    )
    user: str = Field(
        default="",
        description='User-id this rule applies to. "*" matches all users.',
    )
    group: str = Field(
        default="",
        description='Group-id this rule applies to. "*" matches all groups.',
    )
    resource: str = Field(
        default="",
        description='Name of a resource. "*" matches all resources.',
    )
    namespace: str = Field(
        default="",
        description='Name of a namespace. "*" matches all namespaces.',
    )
    read_only: bool = Field(
        default=False,
        alias="readonly",
        description="Matches read-only requests when true, write requests when false",
    )
    non_resource_path: str = Field(
        default="",
        alias="nonResourcePath",
        description='Non-resource request path. "*" matches all paths.',
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_document_keys(cls, data: Any) -> Any:
        """
        Normalize raw document keys.

        Document keys match case-insensitively and explicit nulls are
        treated as absent fields.
        """
        if isinstance(data, dict):
            return {
                _DOCUMENT_KEYS.get(k.lower(), k) if isinstance(k, str) else k: v
                for k, v in data.items()
                if v is not None
            }
        return data

    def to_document(self) -> dict[str, Any]:
        """Convert to the policy document representation."""
        return self.model_dump(by_alias=True)


class UserAttributes(BaseModel):
    """Attributes of the user making a request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(default="", alias="userID")
    group_id: str = Field(default="", alias="groupID")
    roles: list[str] = Field(
        default_factory=list,
        description="Roles held by the user; order is irrelevant",
    )


class ResourceAttributes(BaseModel):
    """Attributes of the resource being accessed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resource: str = Field(default="")
    namespace: str = Field(default="")
    read_only: bool = Field(default=False, alias="readOnly")
