"""AWS EC2 implementation: query builders, response conversion, facade."""

from .compute import EC2
from .filters import (
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
)
from .mapping import to_mapping

__all__ = [
    "EC2",
    "Filter",
    "ImageQuery",
    "InstanceQuery",
    "image_filter",
    "image_id_filter",
    "image_owner_filter",
    "instance_filter",
    "instance_id_filter",
    "make_filter",
    "tag_filter",
    "to_mapping",
]
