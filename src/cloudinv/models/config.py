"""Configuration models."""

from pydantic import BaseModel, Field, model_validator

_REQUIRED_AUTH_FIELDS = {
    "basic": ("user", "password"),
    "client_secret": ("client_id", "client_secret", "tenant_id"),
}


class AuthConfig(BaseModel):
    """Authentication configuration.

    ``basic`` is a vCenter username/password pair exchanged for a session id.
    ``client_secret`` is an Azure service principal used for the OAuth2
    client-credentials flow.
    """

    type: str = Field(..., pattern="^(basic|client_secret)$")
    user: str | None = None
    password: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    tenant_id: str | None = None

    @model_validator(mode="after")
    def validate_auth_fields(self) -> "AuthConfig":
        """Validate the fields required by the chosen auth type are present.

        Returns:
            Validated model

        Raises:
            ValueError: If a required field is missing
        """
        missing = [f for f in _REQUIRED_AUTH_FIELDS[self.type] if not getattr(self, f)]
        if missing:
            raise ValueError(
                f"{', '.join(missing)} required when auth type is '{self.type}'"
            )
        return self


class ProfileConfig(BaseModel):
    """Profile configuration for a vCenter server or an Azure subscription."""

    provider: str = Field(..., pattern="^(vsphere|azure)$")
    host: str | None = None
    subscription_id: str | None = None
    verify_ssl: bool = True
    timeout: int = 30
    auth: AuthConfig

    @model_validator(mode="after")
    def validate_provider_fields(self) -> "ProfileConfig":
        """Check the target and auth type match the provider."""
        if self.provider == "vsphere":
            if not self.host:
                raise ValueError("host required for vsphere profiles")
            if self.auth.type != "basic":
                raise ValueError("vsphere profiles use 'basic' authentication")
        else:
            if not self.subscription_id:
                raise ValueError("subscription_id required for azure profiles")
            if self.auth.type != "client_secret":
                raise ValueError("azure profiles use 'client_secret' authentication")
        return self

    @property
    def target(self) -> str:
        """Host or subscription the profile points at."""
        return self.host if self.provider == "vsphere" else self.subscription_id  # type: ignore[return-value]


class OutputConfig(BaseModel):
    """Output preferences."""

    format: str = Field(default="table", pattern="^(table|json|yaml)$")
    colors: bool = True
