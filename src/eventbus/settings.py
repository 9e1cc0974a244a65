from __future__ import annotations

import os
from dataclasses import dataclass, asdict

from dotenv import load_dotenv

from .bus import FailurePolicy

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


@dataclass
class BusSettings:
    """Bus configuration, normally read from the environment / a .env file."""

    fail_on_error: bool = True
    policy: str | None = None  # overrides fail_on_error when set
    log_level: str = "INFO"

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "BusSettings":
        # Values already present in the environment win over the file
        load_dotenv(env_file, override=False)

        settings = cls()
        raw = os.getenv("EVENTBUS_FAIL_ON_ERROR")
        if raw:
            settings.fail_on_error = _parse_bool("EVENTBUS_FAIL_ON_ERROR", raw)
        policy = os.getenv("EVENTBUS_FAILURE_POLICY")
        if policy:
            try:
                settings.policy = FailurePolicy(policy.strip().lower()).value
            except ValueError:
                choices = ", ".join(p.value for p in FailurePolicy)
                raise ValueError(f"Unknown EVENTBUS_FAILURE_POLICY: {policy} (expected one of {choices})") from None
        settings.log_level = os.getenv("EVENTBUS_LOG_LEVEL", settings.log_level).upper()
        return settings
