"""Provisioning profile decoding services."""

from provisioning.services.profile_decoder import (
    EncodingError,
    FileUnreadable,
    MarkerNotFound,
    PlistParseError,
    ProfileDecodeError,
    ProfileDecoder,
    ResourceNotFound,
    extract_plist,
    get_profile_decoder,
)
from provisioning.services.resource_locator import BundleResourceLocator, ResourceLocator

__all__ = [
    "BundleResourceLocator",
    "EncodingError",
    "FileUnreadable",
    "MarkerNotFound",
    "PlistParseError",
    "ProfileDecodeError",
    "ProfileDecoder",
    "ResourceLocator",
    "ResourceNotFound",
    "extract_plist",
    "get_profile_decoder",
]
