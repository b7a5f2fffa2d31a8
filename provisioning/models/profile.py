"""Pydantic models for decoded provisioning profiles."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_serializer,
    field_validator,
)

logger = logging.getLogger(__name__)


class ApsEnvironment(str, Enum):
    """Apple Push Service environment granted by the profile."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    DISABLED = "disabled"


class Entitlements(BaseModel):
    """Entitlements sub-record of a provisioning profile.

    Every field is decoded on its own: a missing or malformed value falls
    back to the field default instead of failing the profile.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    keychain_access_groups: tuple[StrictStr, ...] = Field(
        default=(),
        alias="keychain-access-groups",
        description="Keychain sharing groups",
    )
    get_task_allow: StrictBool = Field(
        default=False,
        alias="get-task-allow",
        description="Whether a debugger may attach to the app",
    )
    aps_environment: ApsEnvironment = Field(
        default=ApsEnvironment.DISABLED,
        alias="aps-environment",
        description="Push notification gateway the app may use",
    )

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            logger.debug(
                f"Entitlement {field.alias!r} malformed ({value!r}), using default"
            )
            return field.get_default(call_default_factory=True)

    @field_serializer("aps_environment")
    def _serialize_aps_environment(self, value: ApsEnvironment) -> str:
        return value.value


class ProvisioningProfile(BaseModel):
    """Decoded provisioning profile.

    Outer fields are strict: a missing key or a value of the wrong plist
    type fails validation of the whole profile. Field aliases are the
    property list keys.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: StrictStr = Field(..., alias="Name", description="Profile display name")
    app_id_name: StrictStr = Field(
        ..., alias="AppIDName", description="Application identifier name"
    )
    platform: tuple[StrictStr, ...] = Field(
        ..., alias="Platform", description="Platform identifiers, e.g. iOS"
    )
    is_xcode_managed: StrictBool = Field(default=False, alias="IsXcodeManaged")
    creation_date: datetime = Field(..., alias="CreationDate", strict=True)
    expiration_date: datetime = Field(..., alias="ExpirationDate", strict=True)
    entitlements: Entitlements = Field(..., alias="Entitlements")

    @classmethod
    def from_plist(cls, data: dict[str, Any]) -> "ProvisioningProfile":
        """Validate an already parsed property list dictionary.

        Args:
            data: Top-level plist dictionary

        Returns:
            Validated ProvisioningProfile

        Raises:
            pydantic.ValidationError: If a required field is missing or mistyped
        """
        return cls.model_validate(data, by_alias=True, by_name=False)

    def to_plist(self) -> dict[str, Any]:
        """Convert back to a plist dictionary keyed by the profile keys.

        The result can be written with ``plistlib.dumps``.
        """
        return self.model_dump(by_alias=True)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the profile's expiration date has passed.

        Args:
            now: Reference time (defaults to the current UTC time, naive
                unless ``expiration_date`` is timezone-aware)

        Returns:
            True if ``expiration_date`` is at or before ``now``
        """
        if now is None:
            now = datetime.now(timezone.utc)
            if self.expiration_date.tzinfo is None:
                now = now.replace(tzinfo=None)
        return self.expiration_date <= now
