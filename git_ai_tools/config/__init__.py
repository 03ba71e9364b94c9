"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from git_ai_tools.ai import AIConfig, Provider

VALID_PROVIDERS = {p.value for p in Provider}
DEFAULT_TIMEOUT = 60
STRING_FIELDS = ("provider", "api_key", "base_url", "model")

# Original config files spell these in camelCase
KEY_ALIASES = {
    "apiKey": "api_key",
    "baseUrl": "base_url",
}

# Environment overrides: env var -> config field
ENV_OVERRIDES = {
    "GITAI_PROVIDER": "provider",
    "GITAI_API_KEY": "api_key",
    "GITAI_BASE_URL": "base_url",
    "GITAI_MODEL": "model",
    "GITAI_TIMEOUT": "timeout",
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = Provider.OPENAI.value
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    timeout: int = DEFAULT_TIMEOUT

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v not in (None, "")}

    def validate(self) -> list[str]:
        """Return warnings for values that cannot be used as-is.

        Non-string settings and a bad timeout are replaced with their
        defaults. Provider and credential problems are left for
        validate_config() to report.
        """
        warnings = []

        for f in fields(self):
            if f.name in STRING_FIELDS and not isinstance(getattr(self, f.name), str):
                warnings.append(f"Invalid {f.name} '{getattr(self, f.name)}' (expected a string), using '{f.default}'")
                setattr(self, f.name, f.default)

        if self.provider and self.provider.strip().lower() not in VALID_PROVIDERS:
            warnings.append(f"Unknown provider '{self.provider}' (expected one of: {', '.join(sorted(VALID_PROVIDERS))})")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {DEFAULT_TIMEOUT}")
            self.timeout = DEFAULT_TIMEOUT

        return warnings

    def to_ai_config(self) -> AIConfig:
        return AIConfig(
            provider=self.provider,
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
        )

    def apply_env(self, environ: Optional[dict] = None) -> 'Config':
        """Overlay GITAI_* environment variables onto this config."""
        environ = os.environ if environ is None else environ
        for var, key in ENV_OVERRIDES.items():
            value = environ.get(var)
            if not value:
                continue
            if key == "timeout":
                value = int(value) if value.isdigit() else value
            setattr(self, key, value)
        self.validate()
        return self

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)}
        normalized = {KEY_ALIASES.get(k, k): v for k, v in data.items()}
        filtered = {k: v for k, v in normalized.items() if k in valid_keys and v is not None}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".gitairc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        if os.name == 'posix':
            # The file holds an API key
            path.chmod(0o600)
        self._config = config
        self._config_path = path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


def get_local_config_path() -> Path:
    return Path.cwd() / ConfigManager.CONFIG_FILENAME


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "get_local_config_path",
    "VALID_PROVIDERS",
    "ENV_OVERRIDES",
]
