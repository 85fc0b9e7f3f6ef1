"""AWS EC2 implementation of the Compute blueprint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ec2map.aws.filters import ImageQuery, InstanceQuery
from ec2map.aws.mapping import to_mappings
from ec2map.base.async_support import AsyncMixin
from ec2map.base.client_cache import ClientCache
from ec2map.base.compute import ComputeBlueprint, CredentialsLike
from ec2map.base.config import Credentials
from ec2map.base.exceptions import (
    AuthFailureError,
    ClientConstructionError,
    ImageNotFoundError,
    InstanceNotFoundError,
    RemoteServiceError,
    ThrottlingError,
)
from ec2map.base.logger import ec2_logger

_ERROR_MAP: dict[str, type[RemoteServiceError]] = {
    "AuthFailure": AuthFailureError,
    "UnauthorizedOperation": AuthFailureError,
    "InvalidClientTokenId": AuthFailureError,
    "SignatureDoesNotMatch": AuthFailureError,
    "RequestLimitExceeded": ThrottlingError,
    "Throttling": ThrottlingError,
    "InvalidInstanceID.NotFound": InstanceNotFoundError,
    "InvalidInstanceID.Malformed": InstanceNotFoundError,
    "InvalidAMIID.NotFound": ImageNotFoundError,
    "InvalidAMIID.Malformed": ImageNotFoundError,
    "InvalidAMIID.Unavailable": ImageNotFoundError,
}


def _handle(e: Exception, operation: str, region: str | None) -> NoReturn:
    if isinstance(e, ClientError):
        error = e.response.get("Error", {})
        code = error.get("Code")
        message = error.get("Message") or str(e)
        vendor_operation = e.operation_name
    else:
        code = type(e).__name__
        message = str(e)
        vendor_operation = None
    ec2_logger.error(
        f"{operation} failed: {code}",
        operation=operation,
        region=region,
    )
    exc = _ERROR_MAP.get(code or "", RemoteServiceError)
    raise exc(message, code=code, operation=vendor_operation) from e


def _build_client(credentials: Credentials) -> Any:
    try:
        return boto3.client(
            "ec2",
            aws_access_key_id=credentials.access_key,
            aws_secret_access_key=credentials.secret_key,
            aws_session_token=credentials.session_token,
            region_name=credentials.region_name,
            endpoint_url=credentials.endpoint_url,
        )
    except (BotoCoreError, ValueError) as e:
        raise ClientConstructionError(f"Could not create EC2 client: {e}") from e


def _instance_ids(instance_ids: Sequence[str] | str) -> list[str]:
    if isinstance(instance_ids, str):
        return [instance_ids]
    ids = list(instance_ids)
    if not ids:
        raise ValueError("At least one instance ID is required")
    return ids


class EC2(ComputeBlueprint, AsyncMixin):
    """AWS EC2 facade.

    Every operation takes the caller's credentials, reuses (or builds) the
    client cached for them, makes one EC2 call and returns the converted
    result. Each method also has an awaitable twin prefixed with ``a``
    (``adescribe_instances`` and so on).

    Attributes:
        cache: Clients keyed by credentials value.
    """

    def __init__(self, cache: ClientCache | None = None) -> None:
        """
        Args:
            cache: Client cache to use. A fresh one is created when omitted.
        """
        self.cache = cache if cache is not None else ClientCache()

    def get_client(self, credentials: CredentialsLike) -> Any:
        """Return the boto3 EC2 client for *credentials*, building it once.

        Args:
            credentials: :class:`Credentials` or a mapping with
                ``access_key``/``secret_key`` (or ``access-key``/``secret-key``).

        Raises:
            ClientConstructionError: If the credentials are invalid or the
                SDK refuses to build a client from them.
        """
        return self.cache.get_or_create(Credentials.coerce(credentials), _build_client)

    def describe_instances(
        self, credentials: CredentialsLike, query: InstanceQuery | None = None
    ) -> list[dict[str, Any]]:
        """List reservations visible to *credentials*.

        Args:
            credentials: Caller credentials.
            query: Optional :class:`InstanceQuery`, e.g. from
                :func:`~ec2map.aws.filters.instance_id_filter`.

        Returns:
            List of reservation dicts (``instances``, ``groups``,
            ``group-names``).

        Raises:
            RemoteServiceError: On EC2 API failure.
        """
        if query is not None and not isinstance(query, InstanceQuery):
            raise TypeError(f"Expected InstanceQuery, got {type(query).__name__}")
        params = query.to_request() if query is not None else {}
        resp = self._call(credentials, "describe_instances", **params)
        reservations = to_mappings("Reservation", resp.get("Reservations"))
        ec2_logger.info(
            f"Described {len(reservations)} reservation(s)",
            operation="describe_instances",
        )
        return reservations

    def start_instances(
        self, credentials: CredentialsLike, instance_ids: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Start EBS-backed instances.

        Starting an already-running instance has no effect.

        Args:
            credentials: Caller credentials.
            instance_ids: One or more instance IDs, e.g. ``["i-beefcafe"]``.

        Returns:
            One state-change dict (``id``, ``current-state``,
            ``previous-state``) per instance.

        Raises:
            ValueError: If *instance_ids* is empty.
            InstanceNotFoundError: If an instance does not exist.
            RemoteServiceError: On any other EC2 API failure.
        """
        ids = _instance_ids(instance_ids)
        resp = self._call(credentials, "start_instances", InstanceIds=ids)
        changes = to_mappings("InstanceStateChange", resp.get("StartingInstances"))
        ec2_logger.info(f"Started {len(changes)} instance(s)", operation="start_instances")
        return changes

    def stop_instances(
        self, credentials: CredentialsLike, instance_ids: Sequence[str]
    ) -> list[dict[str, Any]]:
        """Stop EBS-backed instances.

        Stopping an already-stopped instance has no effect.

        Raises:
            ValueError: If *instance_ids* is empty.
            InstanceNotFoundError: If an instance does not exist.
            RemoteServiceError: On any other EC2 API failure.
        """
        ids = _instance_ids(instance_ids)
        resp = self._call(credentials, "stop_instances", InstanceIds=ids)
        changes = to_mappings("InstanceStateChange", resp.get("StoppingInstances"))
        ec2_logger.info(f"Stopped {len(changes)} instance(s)", operation="stop_instances")
        return changes

    def describe_images(
        self, credentials: CredentialsLike, query: ImageQuery | None = None
    ) -> list[dict[str, Any]]:
        """List machine images (AMIs).

        Without a query EC2 returns every image the account may launch,
        which includes all public images.

        Raises:
            ImageNotFoundError: If a queried image ID is unknown.
            RemoteServiceError: On any other EC2 API failure.
        """
        if query is not None and not isinstance(query, ImageQuery):
            raise TypeError(f"Expected ImageQuery, got {type(query).__name__}")
        params = query.to_request() if query is not None else {}
        resp = self._call(credentials, "describe_images", **params)
        images = to_mappings("Image", resp.get("Images"))
        ec2_logger.info(f"Described {len(images)} image(s)", operation="describe_images")
        return images

    def _call(self, credentials: CredentialsLike, operation: str, **params: Any) -> dict[str, Any]:
        creds = Credentials.coerce(credentials)
        client = self.get_client(creds)
        ec2_logger.debug(
            f"Calling {operation}",
            operation=operation,
            region=creds.region_name,
        )
        try:
            return getattr(client, operation)(**params)  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            _handle(e, operation, creds.region_name)
