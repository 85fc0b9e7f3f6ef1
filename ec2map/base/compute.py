"""Compute facade blueprint."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from ec2map.base.config import Credentials

CredentialsLike = Credentials | Mapping[str, Any]


class ComputeBlueprint(ABC):
    """Abstract interface for the four EC2 operations.

    Every operation takes the caller's credentials first, makes exactly one
    vendor call and returns plain dicts and lists.
    """

    @abstractmethod
    def describe_instances(
        self, credentials: CredentialsLike, query: Any = None
    ) -> list[dict[str, Any]]:
        """List reservations, optionally narrowed by an instance query.

        Each reservation dict contains:
            - ``instances``: list of instance dicts
            - ``groups``: security groups requested for the reservation
            - ``group-names``: names of those security groups
        """

    @abstractmethod
    def start_instances(
        self, credentials: CredentialsLike, instance_ids: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Start EBS-backed instances and return their state changes.

        Starting an already-running instance has no effect; its state change
        reports the same ``current-state`` and ``previous-state``.
        """

    @abstractmethod
    def stop_instances(
        self, credentials: CredentialsLike, instance_ids: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Stop EBS-backed instances and return their state changes.

        Stopping an already-stopped instance has no effect.
        """

    @abstractmethod
    def describe_images(
        self, credentials: CredentialsLike, query: Any = None
    ) -> list[dict[str, Any]]:
        """List machine images (AMIs), optionally narrowed by an image query."""
