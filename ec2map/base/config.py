"""
Pydantic credential model for EC2 clients.

Validates credentials before they reach boto3 so that a bad pair fails
immediately with :class:`ClientConstructionError` instead of on the first
network call.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ec2map.base.exceptions import ClientConstructionError

DEFAULT_REGION = "us-east-1"


class Credentials(BaseModel):
    """An access-key / secret-key pair plus optional endpoint settings.

    Instances are frozen and compare by value, so two equal pairs share one
    cached client. The hyphenated keys ``access-key`` / ``secret-key`` are
    accepted as aliases.

    ``region_name`` is resolved in order:
    1. The explicit value.
    2. The ``AWS_DEFAULT_REGION`` environment variable.
    3. ``us-east-1``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    access_key: str = Field(alias="access-key", min_length=1, description="AWS access key ID")
    secret_key: str = Field(
        alias="secret-key", min_length=1, repr=False, description="AWS secret access key"
    )
    session_token: str | None = Field(
        default=None, alias="session-token", repr=False, description="STS session token"
    )
    region_name: str | None = Field(default=None, alias="region", description="AWS region")
    endpoint_url: str | None = Field(
        default=None, alias="endpoint-url", description="Override the EC2 endpoint"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_region(cls, values: Any) -> Any:
        """Fall back to the environment, then the SDK's historic default region."""
        if isinstance(values, dict) and not (values.get("region_name") or values.get("region")):
            values = dict(values)
            values["region_name"] = os.environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION
        return values

    @classmethod
    def coerce(cls, value: Credentials | Mapping[str, Any]) -> Credentials:
        """Return *value* as a :class:`Credentials`.

        Raises:
            ClientConstructionError: If *value* is not a valid credentials
                model or mapping.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ClientConstructionError(
                f"Credentials must be a mapping or Credentials, got {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            fields = ", ".join(".".join(map(str, err["loc"])) for err in e.errors())
            raise ClientConstructionError(f"Invalid credentials ({fields})") from e


__all__ = ["Credentials", "DEFAULT_REGION"]
