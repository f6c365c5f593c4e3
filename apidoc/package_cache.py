"""In-memory cache of loaded external package descriptors."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class PackageCache:
    """Maps "@scope/package" or "package" keys to validated descriptors.

    Entries live for the lifetime of the process and are never written to disk.
    """

    def __init__(self) -> None:
        """Create an empty cache."""
        self.packages: dict[str, dict[str, Any]] = {}
        self.hits = 0

    def lookup(self, package_key: str) -> dict[str, Any] | None:
        """Return the cached descriptor for a package, if it was loaded."""
        descriptor = self.packages.get(package_key)
        if descriptor is not None:
            self.hits += 1
            logger.debug("Package cache hit: %s", package_key)
        return descriptor

    def store(self, package_key: str, descriptor: dict[str, Any]) -> None:
        """Remember a validated descriptor."""
        self.packages[package_key] = descriptor
        logger.debug("Cached package %s", package_key)

    def __contains__(self, package_key: object) -> bool:
        return package_key in self.packages

    def __len__(self) -> int:
        return len(self.packages)
