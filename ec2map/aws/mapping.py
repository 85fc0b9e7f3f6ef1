"""Convert EC2 response structures into plain dicts.

boto3 returns nested dicts keyed by EC2 member names (``InstanceId``,
``State``, ...). Each structure has a shape name in the EC2 service model
(``Instance``, ``InstanceState``, ...), and :data:`CONVERTERS` maps that
name to a function that picks a fixed set of members and renames them to
lowercase, hyphenated keys. Nested structures go back through
:func:`to_mapping`, so ``None`` anywhere in the graph stays ``None``.

Values are passed through as botocore produced them: ``LaunchTime`` stays a
``datetime``, enums stay strings.

To support another shape, register a new converter::

    @converter("IamInstanceProfile")
    def _iam_instance_profile(profile):
        return {"arn": profile.get("Arn"), "id": profile.get("Id")}
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Callable

from ec2map.base.exceptions import UnsupportedShapeError

Converter = Callable[[dict[str, Any]], dict[str, Any]]

CONVERTERS: dict[str, Converter] = {}


def converter(shape: str) -> Callable[[Converter], Converter]:
    """Register the decorated function as the converter for *shape*.

    Raises:
        ValueError: If *shape* already has a converter.
    """

    def decorator(fn: Converter) -> Converter:
        if shape in CONVERTERS:
            raise ValueError(f"Converter already registered for shape '{shape}'")
        CONVERTERS[shape] = fn
        return fn

    return decorator


def to_mapping(shape: str, obj: dict[str, Any] | None) -> dict[str, Any] | None:
    """Convert one *shape* structure; ``None`` converts to ``None``.

    Raises:
        UnsupportedShapeError: If no converter is registered for *shape*.
    """
    fn = CONVERTERS.get(shape)
    if fn is None:
        raise UnsupportedShapeError(f"No converter registered for shape '{shape}'")
    if obj is None:
        return None
    return fn(obj)


def to_mappings(
    shape: str, items: Iterable[dict[str, Any]] | None
) -> list[dict[str, Any] | None]:
    """Convert a list of *shape* structures, keeping order."""
    return [to_mapping(shape, item) for item in items or ()]


def normalize_key(s: str) -> str:
    """Lowercase *s* and turn underscores into hyphens."""
    return s.lower().replace("_", "-")


def merge_tags(tags: Iterable[dict[str, Any]] | None) -> dict[str, Any] | None:
    """Collapse a ``Tags`` list into one dict.

    Keys are normalized with :func:`normalize_key`; when two tags normalize
    to the same key the later tag wins. No tags gives ``None``.
    """
    merged: dict[str, Any] = {}
    for tag in tags or ():
        merged.update(to_mapping("Tag", tag) or {})
    return merged or None


# ── Instances ────────────────────────────────────────────────────────


@converter("Tag")
def _tag(tag: dict[str, Any]) -> dict[str, Any]:
    return {normalize_key(tag.get("Key") or ""): tag.get("Value")}


@converter("InstanceState")
def _instance_state(state: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": state.get("Name"),
        "code": state.get("Code"),
    }


@converter("InstanceStateChange")
def _instance_state_change(change: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": change.get("InstanceId"),
        "current-state": to_mapping("InstanceState", change.get("CurrentState")),
        "previous-state": to_mapping("InstanceState", change.get("PreviousState")),
    }


@converter("Placement")
def _placement(placement: dict[str, Any]) -> dict[str, Any]:
    return {
        "availability-zone": placement.get("AvailabilityZone"),
        "group-name": placement.get("GroupName"),
        "tenancy": placement.get("Tenancy"),
    }


@converter("Instance")
def _instance(instance: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": instance.get("InstanceId"),
        "state": to_mapping("InstanceState", instance.get("State")),
        "type": instance.get("InstanceType"),
        "placement": to_mapping("Placement", instance.get("Placement")),
        "tags": merge_tags(instance.get("Tags")),
        "image": instance.get("ImageId"),
        "launch-time": instance.get("LaunchTime"),
    }


@converter("GroupIdentifier")
def _group_identifier(group: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": group.get("GroupId"),
        "name": group.get("GroupName"),
    }


@converter("Reservation")
def _reservation(reservation: dict[str, Any]) -> dict[str, Any]:
    groups = reservation.get("Groups") or []
    return {
        "instances": to_mappings("Instance", reservation.get("Instances")),
        # EC2 has no separate group-name list; derive it from Groups.
        "group-names": [g.get("GroupName") for g in groups],
        "groups": to_mappings("GroupIdentifier", groups),
    }


# ── Images ───────────────────────────────────────────────────────────


@converter("EbsBlockDevice")
def _ebs_block_device(ebs: dict[str, Any]) -> dict[str, Any]:
    return {
        "delete-on-termination": ebs.get("DeleteOnTermination"),
        "iops": ebs.get("Iops"),
        "snapshot-id": ebs.get("SnapshotId"),
        "volume-size": ebs.get("VolumeSize"),
        "volume-type": ebs.get("VolumeType"),
    }


@converter("BlockDeviceMapping")
def _block_device_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    return {
        "device-name": mapping.get("DeviceName"),
        "ebs": to_mapping("EbsBlockDevice", mapping.get("Ebs")),
        "no-device": mapping.get("NoDevice"),
        "virtual-name": mapping.get("VirtualName"),
    }


@converter("ProductCode")
def _product_code(code: dict[str, Any]) -> dict[str, Any]:
    return {
        "product-code-id": code.get("ProductCodeId"),
        "product-code-type": code.get("ProductCodeType"),
    }


@converter("StateReason")
def _state_reason(reason: dict[str, Any]) -> dict[str, Any]:
    return {
        "code": reason.get("Code"),
        "message": reason.get("Message"),
    }


@converter("Image")
def _image(image: dict[str, Any]) -> dict[str, Any]:
    return {
        "architecture": image.get("Architecture"),
        "block-device-mappings": to_mappings(
            "BlockDeviceMapping", image.get("BlockDeviceMappings")
        ),
        "description": image.get("Description"),
        "hypervisor": image.get("Hypervisor"),
        "image-id": image.get("ImageId"),
        "image-location": image.get("ImageLocation"),
        "image-owner-alias": image.get("ImageOwnerAlias"),
        "image-type": image.get("ImageType"),
        "kernel-id": image.get("KernelId"),
        "name": image.get("Name"),
        "owner-id": image.get("OwnerId"),
        "platform": image.get("Platform"),
        "product-codes": to_mappings("ProductCode", image.get("ProductCodes")),
        "public": image.get("Public"),
        "ramdisk-id": image.get("RamdiskId"),
        "root-device-name": image.get("RootDeviceName"),
        "root-device-type": image.get("RootDeviceType"),
        "state": image.get("State"),
        "state-reason": to_mapping("StateReason", image.get("StateReason")),
        "tags": merge_tags(image.get("Tags")),
        "virtualization-type": image.get("VirtualizationType"),
    }


__all__ = [
    "CONVERTERS",
    "converter",
    "to_mapping",
    "to_mappings",
    "normalize_key",
    "merge_tags",
]
