"""
Shared fixtures for provisioning profile tests.
"""

import plistlib
from datetime import datetime

import pytest

# Looks like the start of a DER-encoded CMS SignedData blob, with a few
# byte runs that resemble the plist markers without matching them.
ENVELOPE_PREFIX = (
    b"\x30\x80\x06\x09\x2a\x86\x48\x86\xf7\x0d\x01\x07\x02\xa0\x80\x30\x80"
    b"\x02\x01\x01\x31\x0b\x30\x09\x06\x05\x2b\x0e\x03\x02\x1a\x05\x00"
    b"<plis\x00<PLIST\xff\xfe</plis>\x80\x81<pl ist\x00\x01"
)
ENVELOPE_SUFFIX = (
    b"\n\x00\x00\xa0\x82\x0e\x3f\x30\x82\x04\x22\xff</plist\x00"
    b"<plist version=\"9.9\"><dict><key>Name</key><string>Decoy</string>"
    b"</dict></plist>\xde\xad\xbe\xef"
)


def make_profile_dict(aps_environment: str | None = "development") -> dict:
    """Build a provisioning profile plist dictionary."""
    entitlements = {
        "application-identifier": "ABCDE12345.net.processone.demo",
        "keychain-access-groups": ["ABCDE12345.*"],
        "get-task-allow": True,
        "com.apple.developer.team-identifier": "ABCDE12345",
    }
    if aps_environment is not None:
        entitlements["aps-environment"] = aps_environment

    return {
        "AppIDName": "XMPP Demo",
        "ApplicationIdentifierPrefix": ["ABCDE12345"],
        "CreationDate": datetime(2018, 11, 3, 10, 15, 0),
        "Platform": ["iOS"],
        "IsXcodeManaged": True,
        "DeveloperCertificates": [b"\x30\x82\x05\x8a fake certificate"],
        "Entitlements": entitlements,
        "ExpirationDate": datetime(2019, 11, 3, 10, 15, 0),
        "Name": "Dev Profile",
        "ProvisionedDevices": ["00008020-000A1B2C3D4E5F60"],
        "TeamIdentifier": ["ABCDE12345"],
        "TeamName": "ProcessOne",
        "TimeToLive": 365,
        "UUID": "0b6c1c9e-7a43-4f2b-9d3e-1f2a3b4c5d6e",
        "Version": 1,
    }


def wrap_profile(plist: dict | bytes) -> bytes:
    """Embed a plist in signature-like envelope bytes."""
    if isinstance(plist, dict):
        plist = plistlib.dumps(plist, fmt=plistlib.FMT_XML)
    return ENVELOPE_PREFIX + plist + ENVELOPE_SUFFIX


@pytest.fixture
def write_profile(tmp_path):
    """Write envelope-wrapped profile content and return its path."""

    def _write(content: dict | bytes, name: str = "test.mobileprovision", wrap: bool = True):
        path = tmp_path / name
        path.write_bytes(wrap_profile(content) if wrap else content)
        return path

    return _write


@pytest.fixture
def dev_profile_path(write_profile):
    """Development provisioning profile."""
    return write_profile(make_profile_dict("development"), "dev-mock.mobileprovision")


@pytest.fixture
def prod_profile_path(write_profile):
    """Production provisioning profile."""
    data = make_profile_dict("production")
    data["Name"] = "Prod Profile"
    data["IsXcodeManaged"] = False
    data["Entitlements"]["get-task-allow"] = False
    return write_profile(data, "prod-mock.mobileprovision")


@pytest.fixture
def broken_profile_path(write_profile):
    """Profile whose entitlements lost most of their fields."""
    data = make_profile_dict(None)
    del data["Entitlements"]["keychain-access-groups"]
    del data["Entitlements"]["get-task-allow"]
    del data["IsXcodeManaged"]
    return write_profile(data, "broken-mock.mobileprovision")
