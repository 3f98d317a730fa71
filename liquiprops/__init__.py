"""liquiprops - liquibase.properties configurations and a recency cache for their commands."""

from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "main",
    "CacheStore",
    "ConfigurationRecord",
    "PropertiesCodec",
]

__version__ = "0.1.0"

if TYPE_CHECKING:
    from liquiprops.domains.cache.store.cache import CacheStore
    from liquiprops.domains.configuration.app.codec import PropertiesCodec
    from liquiprops.domains.configuration.domain.record import ConfigurationRecord

    from .cli import main


def __getattr__(name: str) -> Any:
    """Lazy import to keep package import side-effect free."""
    if name == "main":
        from .cli import main

        return main
    if name == "CacheStore":
        from liquiprops.domains.cache.store.cache import CacheStore

        return CacheStore
    if name == "ConfigurationRecord":
        from liquiprops.domains.configuration.domain.record import ConfigurationRecord

        return ConfigurationRecord
    if name == "PropertiesCodec":
        from liquiprops.domains.configuration.app.codec import PropertiesCodec

        return PropertiesCodec
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
