"""Provisioning profile reader.

Decodes the property list embedded in a .mobileprovision file into a typed
ProvisioningProfile, skipping the binary signature envelope.
"""

from pathlib import Path

from provisioning.models.profile import ApsEnvironment, Entitlements, ProvisioningProfile
from provisioning.services.profile_decoder import ProfileDecoder, get_profile_decoder


def read_embedded() -> ProvisioningProfile | None:
    """Read the embedded profile of the configured app bundle."""
    return get_profile_decoder().read_embedded()


def read_from(path: str | Path) -> ProvisioningProfile | None:
    """Read a .mobileprovision file on disk."""
    return get_profile_decoder().read_from(path)


__all__ = [
    "ApsEnvironment",
    "Entitlements",
    "ProfileDecoder",
    "ProvisioningProfile",
    "get_profile_decoder",
    "read_embedded",
    "read_from",
]
