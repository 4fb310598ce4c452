"""
Model catalog — the chat models codemend knows how to ask for, and the
interactive menu used by ``codemend --model``.
"""

from dataclasses import dataclass
from typing import Callable

from .errors import ConfigError


@dataclass(frozen=True)
class ModelInfo:
    name: str        # CLI-facing name
    model_id: str    # id sent to the provider


MODELS: list[ModelInfo] = [
    ModelInfo("nous-hermes-3-llama-3-1-70b", "NousResearch/Hermes-3-Llama-3.1-70B"),
    ModelInfo("meta-llama-3-1-70b-instruct", "meta-llama/Meta-Llama-3.1-70B-Instruct"),
    ModelInfo("meta-llama-3-1-8b-instruct", "meta-llama/Meta-Llama-3.1-8B-Instruct"),
    ModelInfo("meta-llama-3-70b-instruct", "meta-llama/Meta-Llama-3-70B-Instruct"),
    ModelInfo("meta-llama-3-1-405b-instruct", "meta-llama/Meta-Llama-3.1-405B-Instruct"),
    ModelInfo("nousresearch-hermes-3-llama-3-1-405b", "nousresearch/hermes-3-llama-3.1-405b"),
]

_PROVIDER_DEFAULTS = {
    "hyperbolic": "meta-llama-3-1-405b-instruct",
    "openrouter": "nousresearch-hermes-3-llama-3-1-405b",
}


def find_model(name_or_id: str) -> ModelInfo:
    """Look up a model by CLI name or provider id.

    Unknown values are passed through as-is so new provider models can be
    used without a code change.
    """
    for m in MODELS:
        if name_or_id in (m.name, m.model_id):
            return m
    return ModelInfo(name_or_id, name_or_id)


def default_model(provider: str) -> ModelInfo:
    try:
        return find_model(_PROVIDER_DEFAULTS[provider])
    except KeyError:
        raise ConfigError(f"No default model for provider '{provider}'") from None


def select_model(input_fn: Callable[[str], str] | None = None,
                 out: Callable[[str], None] = print) -> ModelInfo:
    """Show a numbered menu and keep asking until a valid choice is made."""
    input_fn = input_fn or input
    out("Select a model:")
    for i, m in enumerate(MODELS, 1):
        out(f"{i}. {m.model_id}")

    while True:
        choice = input_fn("Enter the number of your choice: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(MODELS):
            return MODELS[int(choice) - 1]
        out("Invalid choice. Please try again.")
