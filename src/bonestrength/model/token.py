"""OAuth 2.0 token endpoint response model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class TokenResponse(BaseModel):
    """Successful response of the provider's token endpoint.

    Only ``access_token`` is required; the remaining attributes are kept for debugging but
    are not used by the session, which stores the access token alone. A JSON ``null`` in
    any of them decodes to the field default. Credentials are excluded from the model repr
    so that a logged model never carries them.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1, repr=False)
    token_type: str = ""
    expires_in: int = 0
    refresh_token: str = Field(default="", repr=False)
    scope: str = ""

    @field_validator("token_type", "expires_in", "refresh_token", "scope", mode="before")
    @classmethod
    def null_to_default(cls, v: Optional[object], info: ValidationInfo):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v
