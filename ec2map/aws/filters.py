"""Query builders for ``DescribeInstances`` and ``DescribeImages``.

Filters are plain values: nothing here talks to AWS and nothing validates
filter names, which EC2 checks when the query is sent. Queries compare by
value, so two queries built different ways are interchangeable when equal.

Example::

    query = instance_filter(make_filter("tag:Name", ["my-instance"]))
    ec2.describe_instances(creds, query)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _as_tuple(value: Any) -> Any:
    # A bare string is one value, not a sequence of characters.
    if isinstance(value, str):
        return (value,)
    return value


class Filter(BaseModel):
    """A named constraint: ``name`` must match one of ``values``."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: tuple[str, ...] = ()

    @field_validator("values", mode="before")
    @classmethod
    def coerce_values(cls, value: Any) -> Any:
        return _as_tuple(value)

    def to_request(self) -> dict[str, Any]:
        """Return the EC2 API filter dict."""
        return {"Name": self.name, "Values": list(self.values)}


class InstanceQuery(BaseModel):
    """Arguments for ``DescribeInstances``."""

    model_config = ConfigDict(frozen=True)

    filters: tuple[Filter, ...] = ()
    instance_ids: tuple[str, ...] = ()

    @field_validator("instance_ids", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _as_tuple(value)

    def to_request(self) -> dict[str, Any]:
        """Return boto3 keyword arguments, omitting empty parameters."""
        params: dict[str, Any] = {}
        if self.filters:
            params["Filters"] = [f.to_request() for f in self.filters]
        if self.instance_ids:
            params["InstanceIds"] = list(self.instance_ids)
        return params


class ImageQuery(BaseModel):
    """Arguments for ``DescribeImages``."""

    model_config = ConfigDict(frozen=True)

    filters: tuple[Filter, ...] = ()
    owners: tuple[str, ...] = ()
    image_ids: tuple[str, ...] = ()
    executable_users: tuple[str, ...] = ()

    @field_validator("owners", "image_ids", "executable_users", mode="before")
    @classmethod
    def coerce_strings(cls, value: Any) -> Any:
        return _as_tuple(value)

    def to_request(self) -> dict[str, Any]:
        """Return boto3 keyword arguments, omitting empty parameters."""
        params: dict[str, Any] = {}
        if self.filters:
            params["Filters"] = [f.to_request() for f in self.filters]
        if self.owners:
            params["Owners"] = list(self.owners)
        if self.image_ids:
            params["ImageIds"] = list(self.image_ids)
        if self.executable_users:
            params["ExecutableUsers"] = list(self.executable_users)
        return params


def make_filter(name: str, values: Sequence[str] | str) -> Filter:
    """Return a :class:`Filter` limiting results to ``name`` in ``values``.

    E.g. ``make_filter("tag:Name", ["my-instance"])``.
    """
    return Filter(name=name, values=values)


def tag_filter(key: str, values: Sequence[str] | str) -> Filter:
    """Return a filter on the value of tag *key*."""
    return make_filter(f"tag:{key}", values)


def instance_filter(*filters: Filter) -> InstanceQuery:
    """Return an :class:`InstanceQuery` applying *filters*."""
    return InstanceQuery(filters=filters)


def instance_id_filter(instance_id: str) -> InstanceQuery:
    """Return an instance query matching a single instance."""
    return instance_filter(make_filter("instance-id", [instance_id]))


def image_filter(filters: Sequence[Filter] | Filter) -> ImageQuery:
    """Return an :class:`ImageQuery` applying *filters*.

    A single :class:`Filter` is accepted as a one-element list.
    """
    if isinstance(filters, Filter):
        filters = [filters]
    return ImageQuery(filters=tuple(filters))


def image_id_filter(image_id: Any) -> ImageQuery:
    """Return an image query matching a single image."""
    return image_filter([make_filter("image-id", [str(image_id)])])


def image_owner_filter(owner: str) -> ImageQuery:
    """Return an image query for images owned by *owner*.

    *owner* is an account ID or an alias such as ``"self"`` or ``"amazon"``.
    """
    return ImageQuery(owners=[owner])


__all__ = [
    "Filter",
    "InstanceQuery",
    "ImageQuery",
    "make_filter",
    "tag_filter",
    "instance_filter",
    "instance_id_filter",
    "image_filter",
    "image_id_filter",
    "image_owner_filter",
]
