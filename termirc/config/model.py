from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_IRC_PORT,
    DEFAULT_REALNAME,
    DEFAULT_SHUTDOWN_QUIT_MESSAGE,
    DEFAULT_USER,
)
from ..irc.models import Session, generate_nickname


class ClientConfig(BaseModel):
    """Client settings loaded from the config file and the command line.

    Attributes:
        nickname: Nickname sent at registration; generated when not given.
        user: Username sent in the USER line.
        realname: Real name sent in the USER line.
        default_port: Port used by ``/server`` when none is given.
        connect_timeout: Seconds allowed for opening the connection.
        shutdown_quit_message: QUIT reason sent when the process exits.
        colors: Whether chat output uses ANSI colors.
        bell: Ring the terminal bell on incoming messages.
        log_level: Diagnostic log level for stderr logging.
        server: Server to connect to at startup, if any.
        port: Port for the startup connection; falls back to ``default_port``.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    nickname: str = Field(default_factory=generate_nickname, min_length=1, max_length=30)
    user: str = Field(default=DEFAULT_USER, min_length=1)
    realname: str = Field(default=DEFAULT_REALNAME, min_length=1)
    default_port: int = Field(default=DEFAULT_IRC_PORT, ge=1, le=65535)
    connect_timeout: float = Field(default=CONNECT_TIMEOUT_SECONDS, gt=0)
    shutdown_quit_message: str = DEFAULT_SHUTDOWN_QUIT_MESSAGE
    colors: bool = True
    bell: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    server: str | None = None
    port: int | None = Field(default=None, ge=1, le=65535)

    @field_validator("nickname", "user")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Reject values that would break the registration line."""
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("must be a single word")
        if v[0] in ":#":
            raise ValueError("must not start with ':' or '#'")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create a ClientConfig from a mapping, dropping ``None`` values.

        Args:
            data: Raw settings, e.g. parsed JSON merged with CLI overrides.

        Returns:
            ClientConfig instance.
        """
        return cls(**{k: v for k, v in data.items() if v is not None})

    def build_session(self) -> Session:
        return Session(nickname=self.nickname, user=self.user, realname=self.realname)
