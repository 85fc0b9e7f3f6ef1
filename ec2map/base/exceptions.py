"""
ec2map exception hierarchy.

Two failure families reach callers: :class:`ClientConstructionError` when a
client cannot be built from the supplied credentials, and
:class:`RemoteServiceError` (plus code-specific subclasses) when the EC2 call
itself fails.
"""

from __future__ import annotations


# ── Base ──────────────────────────────────────────────────────────────
class Ec2MapError(Exception):
    """Root exception for all ec2map errors."""


# ── Client construction ──────────────────────────────────────────────
class ClientConstructionError(Ec2MapError):
    """Credentials are missing or malformed, or the SDK rejected them."""


# ── Remote service ───────────────────────────────────────────────────
class RemoteServiceError(Ec2MapError):
    """A vendor call failed.

    Attributes:
        code: Vendor error code (e.g. ``InvalidInstanceID.NotFound``), or the
            botocore exception class name for transport-level faults.
        message: Vendor error message.
        operation: EC2 operation name (e.g. ``DescribeInstances``).
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(f"{code}: {message}" if code else message)
        self.code = code
        self.message = message
        self.operation = operation


class AuthFailureError(RemoteServiceError):
    """Credentials were rejected or lack permission."""


class ThrottlingError(RemoteServiceError):
    """Request rate exceeded."""


class InstanceNotFoundError(RemoteServiceError):
    """Instance ID unknown or malformed."""


class ImageNotFoundError(RemoteServiceError):
    """Image (AMI) ID unknown, malformed or unavailable."""


# ── Conversion ───────────────────────────────────────────────────────
class UnsupportedShapeError(Ec2MapError):
    """No converter is registered for a vendor shape."""
