"""Configuration handling for git-workspace-keeper"""

import os
from dataclasses import dataclass, field, fields
from typing import Optional

from git_workspace_keeper.exceptions import ConfigurationError

TOKEN_ENV_VAR = "GIT_TOKEN"


@dataclass
class Config:
    """Configuration for git-workspace-keeper with validation."""

    # Remotes
    remote_name: str = "origin"  # Remote the workspace is synchronized from
    push_remote_name: str = "ninja"  # Remote reserved for publishing, never fetched from

    # Timeouts (seconds)
    command_timeout: float = 120.0  # Hard limit after which a git process is killed
    fetch_timeout_step: float = 50.0  # Attempt n of a fetch waits n * step
    max_fetch_attempts: Optional[int] = None  # None = retry until a fetch finishes in time

    # Identity used by add_and_commit when the workspace has none
    bot_name: str = "git-workspace-keeper"
    bot_email: str = "nobody@domain.com"

    # Credentials for https endpoints
    token: Optional[str] = field(default_factory=lambda: os.environ.get(TOKEN_ENV_VAR) or None)

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_names()
        self._validate_timeouts()
        self._validate_max_fetch_attempts()
        self._validate_bot_identity()

    def _validate_remote_names(self):
        """Validate remote names are set and distinct."""
        for name in ("remote_name", "push_remote_name"):
            value = getattr(self, name)
            if not value or not value.strip() or any(ch.isspace() for ch in value.strip()):
                raise ConfigurationError(f"{name} must be a non-empty name without spaces, got '{value}'")
            setattr(self, name, value.strip())
        if self.remote_name == self.push_remote_name:
            raise ConfigurationError(
                f"push_remote_name must differ from remote_name, both are '{self.remote_name}'"
            )

    def _validate_timeouts(self):
        """Validate timeouts are positive."""
        if self.command_timeout <= 0:
            raise ConfigurationError(f"command_timeout must be positive, got {self.command_timeout}")
        if self.fetch_timeout_step <= 0:
            raise ConfigurationError(f"fetch_timeout_step must be positive, got {self.fetch_timeout_step}")

    def _validate_max_fetch_attempts(self):
        """Validate max_fetch_attempts is unset or positive."""
        if self.max_fetch_attempts is not None and self.max_fetch_attempts <= 0:
            raise ConfigurationError(
                f"max_fetch_attempts must be positive or None, got {self.max_fetch_attempts}"
            )

    def _validate_bot_identity(self):
        """Validate the fallback commit identity."""
        if not self.bot_name.strip() or "@" not in self.bot_email:
            raise ConfigurationError(
                f"bot identity must have a name and an email, got '{self.bot_name} <{self.bot_email}>'"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary. The token is masked."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if data["token"]:
            data["token"] = "***"
        return data

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
