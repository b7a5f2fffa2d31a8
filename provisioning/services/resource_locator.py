"""Resource lookup for the embedded provisioning profile."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ResourceLocator(Protocol):
    """Anything that can map a bundle resource name to a file path."""

    def path_for_resource(self, name: str, extension: str) -> str | None:
        ...


class BundleResourceLocator:
    """Looks up resources as ``<name>.<extension>`` in a bundle directory."""

    def __init__(self, bundle_path: str | Path):
        self.bundle_path = Path(bundle_path)

    def path_for_resource(self, name: str, extension: str) -> str | None:
        """Find a resource file in the bundle.

        Args:
            name: Resource name without extension
            extension: File extension without the leading dot

        Returns:
            Path to the resource if it is an existing file, None otherwise
        """
        candidate = self.bundle_path / f"{name}.{extension}"
        if not candidate.is_file():
            logger.debug(f"Resource not found in bundle: {candidate}")
            return None
        return str(candidate)
