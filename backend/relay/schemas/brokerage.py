"""Brokerage Schemas — request bodies for the SnapTrade relay routes.

Invariants:
    - Every field is optional at the schema level: presence is checked by
      core/validate_fields so the 400 message names the missing fields
    - Wire names are camelCase (aliases); Python attributes are snake_case
    - Numeric userId and userSecret values are coerced to strings (frontends
      send numeric user ids)

Design Decisions:
    - extra="ignore": unknown frontend fields are dropped, never forwarded
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _stringify_number(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class _RelayBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def wire_params(self) -> dict[str, Any]:
        """Fields keyed by their wire (camelCase) names."""
        return self.model_dump(by_alias=True)


class RegisterUserRequest(_RelayBody):
    """POST /register-user body."""
    user_id: str | None = Field(None, alias="userId")

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v):
        return _stringify_number(v)


class ConnectPortalRequest(_RelayBody):
    """POST /connect-portal-url body — broker and redirect options are optional."""
    user_id: str | None = Field(None, alias="userId")
    user_secret: str | None = Field(None, alias="userSecret")
    broker: str | None = None
    immediate_redirect: bool | None = Field(None, alias="immediateRedirect")
    custom_redirect: str | None = Field(None, alias="customRedirect")

    @field_validator("user_id", "user_secret", mode="before")
    @classmethod
    def coerce_credentials(cls, v):
        return _stringify_number(v)


class DeleteUserRequest(_RelayBody):
    """DELETE /delete-user body."""
    user_id: str | None = Field(None, alias="userId")

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v):
        return _stringify_number(v)
