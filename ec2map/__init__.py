"""ec2map: EC2 instances and images as plain dicts.

Each call takes a credentials mapping first::

    import ec2map

    creds = {"access_key": "AKIA...", "secret_key": "..."}
    ec2map.describe_instances(creds, ec2map.instance_id_filter("i-beefcafe"))
    ec2map.start_instances(creds, ["i-beefcafe", "i-deadbabe"])

The module-level functions share one default :class:`EC2` facade and its
client cache. Create your own ``EC2(ClientCache())`` to keep a separate cache.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .aws import (
    EC2,
    Filter,
    ImageQuery,
    InstanceQuery,
    image_filter,
    image_id_filter,
    image_owner_filter,
    instance_filter,
    instance_id_filter,
    make_filter,
    tag_filter,
    to_mapping,
)
from .base import ClientCache, ComputeBlueprint, Credentials
from .base.compute import CredentialsLike
from .base.exceptions import (
    ClientConstructionError,
    Ec2MapError,
    RemoteServiceError,
)

default_ec2 = EC2()


def describe_instances(
    credentials: CredentialsLike, query: InstanceQuery | None = None
) -> list[dict[str, Any]]:
    """List reservations using the default facade."""
    return default_ec2.describe_instances(credentials, query)


def start_instances(credentials: CredentialsLike, instance_ids: Sequence[str]) -> list[dict[str, Any]]:
    """Start instances using the default facade."""
    return default_ec2.start_instances(credentials, instance_ids)


def stop_instances(credentials: CredentialsLike, instance_ids: Sequence[str]) -> list[dict[str, Any]]:
    """Stop instances using the default facade."""
    return default_ec2.stop_instances(credentials, instance_ids)


def describe_images(
    credentials: CredentialsLike, query: ImageQuery | None = None
) -> list[dict[str, Any]]:
    """List images using the default facade."""
    return default_ec2.describe_images(credentials, query)


__all__ = [
    "EC2",
    "ClientCache",
    "ComputeBlueprint",
    "Credentials",
    "Filter",
    "ImageQuery",
    "InstanceQuery",
    "ClientConstructionError",
    "Ec2MapError",
    "RemoteServiceError",
    "default_ec2",
    "describe_images",
    "describe_instances",
    "image_filter",
    "image_id_filter",
    "image_owner_filter",
    "instance_filter",
    "instance_id_filter",
    "make_filter",
    "start_instances",
    "stop_instances",
    "tag_filter",
    "to_mapping",
]
