"""
Configuration — loads settings from .codemend.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml

from .errors import ConfigError


PROVIDERS = ("hyperbolic", "openrouter")

_DEFAULTS = {
    "provider": "hyperbolic",
    "model": None,  # provider default, see models.default_model()
    "hyperbolic_base_url": "https://api.hyperbolic.xyz/v1",
    "openrouter_base_url": "https://openrouter.ai/api/v1",
    "max_tokens": 2048,
    "temperature": 0.7,
    "top_p": 0.9,
    "llm_max_retries": 3,
    "llm_retry_delay": 2.0,
    "request_timeout": 300,
    "full_replace_ratio": 0.5,
    "apply_deletions": False,
    "review_ui": "console",
    "log_dir": ".codemend/logs",
}

_TRUE_STRINGS = ("true", "yes", "on", "1")

# Config file search locations
_CONFIG_FILENAMES = [".codemend.yaml", ".codemend.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def default_credentials_dir() -> str:
    """The user's config directory (``$XDG_CONFIG_HOME`` or ``~/.config``)."""
    return os.getenv("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config")


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .codemend.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _cast(key: str, value, cast):
            try:
                return cast(value)
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid value for {key}: {value!r}") from None

        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return _cast(env_key, env_val, cast)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return _cast(yaml_key, yaml_val, cast)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.strip().lower() in _TRUE_STRINGS
            yaml_val = yd.get(yaml_key)
            if isinstance(yaml_val, str):
                return yaml_val.strip().lower() in _TRUE_STRINGS
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.PROVIDER = _get("CODEMEND_PROVIDER", "provider",
                             _DEFAULTS["provider"]).lower()
        if self.PROVIDER not in PROVIDERS:
            raise ConfigError(
                f"Unknown provider '{self.PROVIDER}' "
                f"(expected one of: {', '.join(PROVIDERS)})")
        self.MODEL: str | None = _get("CODEMEND_MODEL", "model",
                                      _DEFAULTS["model"])

        self.HYPERBOLIC_BASE_URL = _get("HYPERBOLIC_BASE_URL", "hyperbolic_base_url",
                                        _DEFAULTS["hyperbolic_base_url"])
        self.OPENROUTER_BASE_URL = _get("OPENROUTER_BASE_URL", "openrouter_base_url",
                                        _DEFAULTS["openrouter_base_url"])

        # Per-provider sections may carry an api_key
        self._api_keys: dict[str, str] = {}
        for provider in PROVIDERS:
            section = yd.get(provider, {}) if isinstance(yd.get(provider), dict) else {}
            key = os.getenv(f"{provider.upper()}_API_KEY") or section.get("api_key", "")
            if key:
                self._api_keys[provider] = str(key).strip()

        self.MAX_TOKENS = _get("MAX_TOKENS", "max_tokens",
                               _DEFAULTS["max_tokens"], cast=int)
        self.TEMPERATURE = _get("TEMPERATURE", "temperature",
                                _DEFAULTS["temperature"], cast=float)
        self.TOP_P = _get("TOP_P", "top_p", _DEFAULTS["top_p"], cast=float)

        self.LLM_MAX_RETRIES = _get("LLM_MAX_RETRIES", "llm_max_retries",
                                    _DEFAULTS["llm_max_retries"], cast=int)
        self.LLM_RETRY_DELAY = _get("LLM_RETRY_DELAY", "llm_retry_delay",
                                    _DEFAULTS["llm_retry_delay"], cast=float)
        self.REQUEST_TIMEOUT = _get("REQUEST_TIMEOUT", "request_timeout",
                                    _DEFAULTS["request_timeout"], cast=int)

        # Merge behaviour
        self.FULL_REPLACE_RATIO = _get("FULL_REPLACE_RATIO", "full_replace_ratio",
                                       _DEFAULTS["full_replace_ratio"], cast=float)
        self.APPLY_DELETIONS = _get_bool("APPLY_DELETIONS", "apply_deletions",
                                         _DEFAULTS["apply_deletions"])
        self.REVIEW_UI = _get("REVIEW_UI", "review_ui",
                              _DEFAULTS["review_ui"]).lower()

        self.CREDENTIALS_DIR = _get("CODEMEND_CREDENTIALS_DIR", "credentials_dir",
                                    default_credentials_dir())
        self.LOG_DIR = _get("CODEMEND_LOG_DIR", "log_dir", _DEFAULTS["log_dir"])

    def get_api_key(self, provider: str) -> str | None:
        """Return the configured API key for *provider*, or None."""
        return self._api_keys.get(provider.lower())

    def base_url(self, provider: str) -> str:
        if provider == "openrouter":
            return self.OPENROUTER_BASE_URL
        return self.HYPERBOLIC_BASE_URL

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
