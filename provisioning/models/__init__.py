"""Data models for decoded provisioning profiles."""

from provisioning.models.profile import ApsEnvironment, Entitlements, ProvisioningProfile

__all__ = [
    "ApsEnvironment",
    "Entitlements",
    "ProvisioningProfile",
]
