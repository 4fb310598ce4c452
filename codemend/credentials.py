"""
API key storage — keys live in ``<credentials_dir>/<provider>_api_key.txt``
and are prompted for once when missing.
"""

import os
from typing import Callable

from .cli_display import log
from .errors import ConfigError


def key_file_path(credentials_dir: str, provider: str) -> str:
    return os.path.join(credentials_dir, f"{provider.lower()}_api_key.txt")


def load_api_key(credentials_dir: str, provider: str) -> str | None:
    """Return the stored key for *provider*, or None if there is none."""
    path = key_file_path(credentials_dir, provider)
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        key = f.read().strip()
    return key or None


def save_api_key(credentials_dir: str, provider: str, api_key: str) -> str:
    """Persist *api_key* and return the file it was written to."""
    path = key_file_path(credentials_dir, provider)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(api_key)
    try:
        os.chmod(path, 0o600)
    except OSError as e:
        log.warning(f"Could not restrict permissions on {path}: {e}")
    return path


def get_or_prompt_for_api_key(provider: str, credentials_dir: str,
                              configured: str | None = None,
                              input_fn: Callable[[str], str] | None = input) -> str:
    """Resolve an API key: config/env first, then the key file, then a prompt.

    A prompted key is saved for next time.  Pass ``input_fn=None`` for
    non-interactive use; a missing key then raises :class:`ConfigError`.
    """
    if configured:
        return configured

    stored = load_api_key(credentials_dir, provider)
    if stored:
        log.debug(f"Loaded {provider} API key from {key_file_path(credentials_dir, provider)}")
        return stored

    if input_fn is None:
        raise ConfigError(
            f"No API key for {provider}. Set {provider.upper()}_API_KEY "
            f"or add it to .codemend.yaml.")

    label = {"hyperbolic": "Hyperbolic", "openrouter": "OpenRouter"}.get(
        provider.lower(), provider)
    api_key = input_fn(f"Enter your {label} API key: ").strip()
    if not api_key:
        raise ConfigError(f"Empty {label} API key")
    path = save_api_key(credentials_dir, provider, api_key)
    log.info(f"Saved {provider} API key to {path}")
    return api_key
