"""Runtime support for generated pool modules."""

from .pool import MessagePool, PoolRegistry, default_registry, pool_for

__all__ = ["MessagePool", "PoolRegistry", "default_registry", "pool_for"]
