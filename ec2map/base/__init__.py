"""Provider-neutral building blocks: blueprint, config, cache, errors, logging."""

from .client_cache import ClientCache
from .compute import ComputeBlueprint
from .config import Credentials


__all__ = [
    "ClientCache",
    "ComputeBlueprint",
    "Credentials",
]
