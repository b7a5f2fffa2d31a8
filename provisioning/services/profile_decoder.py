"""
Provisioning Profile Decoder

Reads a .mobileprovision file and decodes the XML property list embedded
in its CMS signature envelope. The envelope is skipped, never verified:
- The file is viewed as Latin-1 text so binary bytes cannot break scanning
- The plist is cut out between the first "<plist" and the next "</plist>"
- The payload is parsed with plistlib and validated into ProvisioningProfile
"""

import logging
import plistlib
from pathlib import Path
from typing import Any, Optional
from xml.parsers.expat import ExpatError

from pydantic import ValidationError

from provisioning.config import Settings, get_settings
from provisioning.models.profile import ProvisioningProfile
from provisioning.services.resource_locator import BundleResourceLocator, ResourceLocator

logger = logging.getLogger(__name__)

PLIST_START_MARKER = "<plist"
PLIST_END_MARKER = "</plist>"

# Every byte value maps to exactly one Latin-1 code point
PROFILE_ENCODING = "latin-1"


class ProfileDecodeError(Exception):
    """Raised when a provisioning profile cannot be decoded."""

    pass


class ResourceNotFound(ProfileDecodeError):
    """The resource locator has no embedded profile."""

    pass


class FileUnreadable(ProfileDecodeError):
    """The profile file does not exist or cannot be read."""

    pass


class EncodingError(ProfileDecodeError):
    """Converting between profile bytes and text failed."""

    pass


class MarkerNotFound(ProfileDecodeError):
    """The plist start or end marker is missing."""

    pass


class PlistParseError(ProfileDecodeError):
    """The plist payload is malformed or lacks a required field."""

    pass


def extract_plist(text: str) -> str:
    """Cut the embedded plist document out of the profile text.

    Args:
        text: Whole profile viewed as Latin-1 text

    Returns:
        Text from "<plist" through the first following "</plist>"

    Raises:
        MarkerNotFound: If either marker is absent
    """
    start = text.find(PLIST_START_MARKER)
    if start == -1:
        raise MarkerNotFound(f"Start marker {PLIST_START_MARKER!r} not found")

    end = text.find(PLIST_END_MARKER, start)
    if end == -1:
        raise MarkerNotFound(
            f"End marker {PLIST_END_MARKER!r} not found after offset {start}"
        )

    return text[start:end] + PLIST_END_MARKER


class ProfileDecoder:
    """Decodes provisioning profiles from files, buffers or the app bundle.

    The ``read_*`` methods return None on any failure. The ``load_*``
    methods raise a ProfileDecodeError subclass naming the cause.
    """

    def __init__(
        self,
        locator: Optional[ResourceLocator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.locator = locator or BundleResourceLocator(self.settings.bundle_path)

    def read_embedded(self) -> Optional[ProvisioningProfile]:
        """Read the profile embedded in the app bundle, or None."""
        try:
            return self.load_embedded()
        except ProfileDecodeError as e:
            logger.debug(f"Embedded provisioning profile unavailable: {e}")
            return None

    def read_from(self, path: str | Path) -> Optional[ProvisioningProfile]:
        """Read a provisioning profile file on disk, or None."""
        try:
            return self.load(path)
        except ProfileDecodeError as e:
            logger.debug(f"Failed to decode provisioning profile {path}: {e}")
            return None

    def read_from_bytes(self, data: bytes) -> Optional[ProvisioningProfile]:
        """Decode provisioning profile content already in memory, or None."""
        try:
            return self.load_bytes(data)
        except ProfileDecodeError as e:
            logger.debug(f"Failed to decode provisioning profile buffer: {e}")
            return None

    def load_embedded(self) -> ProvisioningProfile:
        """Load the profile embedded in the app bundle.

        Returns:
            Decoded ProvisioningProfile

        Raises:
            ResourceNotFound: If the locator has no embedded profile
            ProfileDecodeError: If the profile cannot be decoded
        """
        name = self.settings.embedded_resource_name
        extension = self.settings.embedded_resource_extension
        path = self.locator.path_for_resource(name, extension)
        if path is None:
            raise ResourceNotFound(f"No {name}.{extension} resource available")
        return self.load(path)

    def load(self, path: str | Path) -> ProvisioningProfile:
        """Load a provisioning profile file on disk.

        Args:
            path: Path to the .mobileprovision file

        Returns:
            Decoded ProvisioningProfile

        Raises:
            FileUnreadable: If the file cannot be opened or read
            ProfileDecodeError: If the content cannot be decoded
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileUnreadable(f"Cannot read {path}: {e}") from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return self.load_bytes(data)

    def load_bytes(self, data: bytes) -> ProvisioningProfile:
        """Decode provisioning profile content.

        Args:
            data: Raw profile bytes, signature envelope included

        Returns:
            Decoded ProvisioningProfile

        Raises:
            EncodingError: If the bytes cannot be viewed as Latin-1 text
            MarkerNotFound: If the plist markers are missing
            PlistParseError: If the plist is malformed or incomplete
        """
        try:
            text = data.decode(PROFILE_ENCODING)
        except UnicodeError as e:
            raise EncodingError(f"Cannot decode profile as {PROFILE_ENCODING}: {e}") from e

        payload = extract_plist(text)

        try:
            plist_data = payload.encode(PROFILE_ENCODING)
        except UnicodeError as e:
            raise EncodingError(f"Cannot encode plist as {PROFILE_ENCODING}: {e}") from e

        return self._decode_plist(plist_data)

    def _parse_plist(self, plist_data: bytes) -> dict[str, Any]:
        """Parse XML plist bytes into a top-level dictionary."""
        try:
            root = plistlib.loads(plist_data, fmt=plistlib.FMT_XML)
        except (ExpatError, ValueError, AttributeError, IndexError, TypeError) as e:
            raise PlistParseError(f"Malformed plist: {e}") from e

        if not isinstance(root, dict):
            raise PlistParseError(
                f"Plist root must be a dict, got {type(root).__name__}"
            )
        return root

    def _decode_plist(self, plist_data: bytes) -> ProvisioningProfile:
        """Validate parsed plist content into a ProvisioningProfile."""
        root = self._parse_plist(plist_data)
        try:
            return ProvisioningProfile.from_plist(root)
        except ValidationError as e:
            error_details = []
            for error in e.errors():
                loc = " -> ".join(str(l) for l in error["loc"])
                error_details.append(f"{loc}: {error['msg']}")
            raise PlistParseError(
                "Invalid provisioning profile: " + "; ".join(error_details)
            ) from e


# Singleton instance
_profile_decoder: Optional[ProfileDecoder] = None


def get_profile_decoder() -> ProfileDecoder:
    """Get profile decoder singleton"""
    global _profile_decoder
    if _profile_decoder is None:
        _profile_decoder = ProfileDecoder()
    return _profile_decoder
