"""Client configuration for pypassport."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pypassport._constants import BASE_URL, DEFAULT_REQUEST_TIMEOUT
from pypassport.exceptions import PassportConfigError


def _default_user_agent() -> str:
    from pypassport import __version__

    return f"pypassport/{__version__}"


@dataclasses.dataclass(frozen=True)
class PassportConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base address of the Passport API. Endpoints such as
        ``account/data`` are appended to it.
    request_timeout : float
        Total per-request timeout in seconds, enforced by aiohttp.
    storage_path : str or None
        File used to persist the session credential across restarts.
        ``None`` keeps the credential in memory only.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    storage_path: str | None = None
    user_agent: str = dataclasses.field(default_factory=_default_user_agent)

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise PassportConfigError("base_url must be non-empty")
        if self.request_timeout <= 0:
            raise PassportConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Endpoints are joined as relative paths.
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")

    @classmethod
    def from_env(cls, **overrides: Any) -> PassportConfig:
        """Create configuration from environment variables.

        Reads ``PASSPORT_BASE_URL``, ``PASSPORT_REQUEST_TIMEOUT``,
        ``PASSPORT_STORAGE_PATH`` and ``PASSPORT_USER_AGENT``. Explicit
        keyword arguments override environment values.

        Returns
        -------
        PassportConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PASSPORT_BASE_URL": "base_url",
            "PASSPORT_STORAGE_PATH": "storage_path",
            "PASSPORT_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("PASSPORT_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise PassportConfigError(f"PASSPORT_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
