import math
import os
import platform
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_TIMEOUT = 10.0

# The validator binary is bundled next to this package.
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

_X64_MACHINES = {"x86_64", "amd64"}


def default_executable_path() -> Optional[str]:
    """Returns the bundled validator path for this platform, or None if there is no build for it."""
    if platform.machine().lower() not in _X64_MACHINES:
        return None

    if sys.platform.startswith("win"):
        return os.path.join(PACKAGE_DIR, "gltf_validator.exe")
    if sys.platform.startswith("linux"):
        return os.path.join(PACKAGE_DIR, "gltf_validator")

    return None


@dataclass(frozen=True)
class ValidatorConfig:
    executable_path: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.timeout, (int, float)) or not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(f"Validator timeout must be a finite number of seconds above zero, got {self.timeout!r}")

    @classmethod
    def from_environment(cls, env_path=None):
        """
        Builds a config from the environment, loading a .env file first.

        GLTF_VALIDATOR_PATH overrides the auto-detected executable and
        GLTF_VALIDATOR_TIMEOUT sets the wait limit in seconds.
        """
        load_dotenv(env_path)

        executable_path = os.getenv("GLTF_VALIDATOR_PATH") or default_executable_path()

        timeout = DEFAULT_TIMEOUT
        raw_timeout = os.getenv("GLTF_VALIDATOR_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"GLTF_VALIDATOR_TIMEOUT must be a number of seconds, got '{raw_timeout}'")

        return cls(executable_path=executable_path, timeout=timeout)


_default_config: Optional[ValidatorConfig] = None


def get_default_config() -> ValidatorConfig:
    """Returns the process-wide config, resolving it on first use."""
    global _default_config
    if _default_config is None:
        _default_config = ValidatorConfig.from_environment()
    return _default_config


def set_default_config(config: Optional[ValidatorConfig]):
    """Replaces the process-wide config. Passing None re-resolves it on next use."""
    global _default_config
    _default_config = config
