"""Configuration manager for cloudinv.

Profiles live in ``config.yaml`` under the config directory. Secret auth
fields are age-encrypted with an identity file kept next to it, so the YAML
file alone never reveals a password or client secret.
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pyrage
import yaml
from pydantic import BaseModel, Field, ValidationError

from ..api.exceptions import ConfigError
from ..crypto import IDENTITY_FILE_NAME, decrypt, encrypt, is_encrypted
from ..models.config import AuthConfig, OutputConfig, ProfileConfig

CONFIG_DIR_ENV = "CLOUDINV_CONFIG_DIR"
CONFIG_FILE_NAME = "config.yaml"

# Auth fields stored age-encrypted on disk
SECRET_FIELDS = ("password", "client_secret")


class Config(BaseModel):
    """Main configuration model."""

    default_profile: str | None = None
    profiles: dict[str, ProfileConfig] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)


def default_config_dir() -> Path:
    """Return the config directory, honouring ``CLOUDINV_CONFIG_DIR``."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "cloudinv"


def _secrets(auth: AuthConfig | dict) -> Iterator[tuple[str, str]]:
    """Yield ``(field, value)`` for every secret field that is set."""
    for field in SECRET_FIELDS:
        value = auth.get(field) if isinstance(auth, dict) else getattr(auth, field)
        if value:
            yield field, value


class ConfigManager:
    """Read and write the profile store."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Config directory (see :func:`default_config_dir`)
        """
        self.config_dir = config_dir or default_config_dir()
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self.identity_file = self.config_dir / IDENTITY_FILE_NAME
        self._config: Config | None = None

    def exists(self) -> bool:
        """Check whether the config file has been written yet."""
        return self.config_file.exists()

    def load(self) -> Config:
        """Read, validate and decrypt the config file.

        Plaintext secrets found on disk are encrypted again right away.

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if not self.exists():
            raise ConfigError(
                f"Configuration file not found at {self.config_file}. "
                "Run 'cloudinv config add' to create one."
            )

        try:
            data = yaml.safe_load(self.config_file.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read {self.config_file}: {e}")

        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {self.config_file}: {e}")

        if self._decrypt_secrets(config):
            self.save(config)
        self._config = config
        return config

    def save(self, config: Config) -> None:
        """Encrypt secrets and write the config file (mode 0600).

        Args:
            config: Configuration to save

        Raises:
            ConfigError: If the file cannot be written
        """
        data = config.model_dump(exclude_none=True)
        for profile in data.get("profiles", {}).values():
            auth = profile.get("auth", {})
            for field, value in _secrets(auth):
                auth[field] = encrypt(value, self.identity_file)

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_dir.chmod(0o700)
            self.config_file.write_text(yaml.safe_dump(data, default_flow_style=False))
            self.config_file.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}")
        self._config = config

    def get(self) -> Config:
        """Return the cached configuration, loading it on first use."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def _require(self, config: Config, name: str) -> None:
        if name not in config.profiles:
            raise ConfigError(f"Profile '{name}' not found")

    def get_profile(self, name: str | None = None) -> ProfileConfig:
        """Get a profile by name, or the default one.

        Args:
            name: Profile name (uses default if None)

        Returns:
            Profile configuration

        Raises:
            ConfigError: If no such profile exists or no default is set
        """
        config = self.get()
        name = name or config.default_profile
        if name is None:
            raise ConfigError("No default profile set. Use --profile to specify one.")
        if name not in config.profiles:
            raise ConfigError(
                f"Profile '{name}' not found. Available profiles: "
                f"{', '.join(config.profiles)}"
            )
        return config.profiles[name]

    def add_profile(self, name: str, profile: ProfileConfig) -> None:
        """Add or replace a profile. The first profile becomes the default."""
        config = self.get() if self.exists() else Config()
        config.profiles[name] = profile
        config.default_profile = config.default_profile or name
        self.save(config)

    def remove_profile(self, name: str) -> None:
        """Remove a profile, moving the default to the next one if needed.

        Raises:
            ConfigError: If profile not found
        """
        config = self.get()
        self._require(config, name)
        del config.profiles[name]
        if config.default_profile == name:
            config.default_profile = next(iter(config.profiles), None)
        self.save(config)

    def set_default_profile(self, name: str) -> None:
        """Make *name* the default profile.

        Raises:
            ConfigError: If profile not found
        """
        config = self.get()
        self._require(config, name)
        config.default_profile = name
        self.save(config)

    def list_profiles(self) -> list[str]:
        """Return profile names in insertion order."""
        return list(self.get().profiles)

    def _decrypt_secrets(self, config: Config) -> bool:
        """Decrypt secrets in place. Returns True if any was stored in plaintext."""
        plaintext_found = False
        for profile_name, profile in config.profiles.items():
            for field, value in _secrets(profile.auth):
                if not is_encrypted(value):
                    plaintext_found = True
                    continue
                try:
                    setattr(profile.auth, field, decrypt(value, self.identity_file))
                except (pyrage.DecryptError, ValueError) as e:
                    raise ConfigError(
                        f"Cannot decrypt {field} of profile '{profile_name}' "
                        f"with {self.identity_file}: {e}"
                    )
        return plaintext_found
