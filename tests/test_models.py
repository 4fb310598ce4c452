"""Tests for the model catalog and selection menu."""

import pytest

from codemend.errors import ConfigError
from codemend.models import MODELS, default_model, find_model, select_model


def test_catalog_has_six_models():
    assert len(MODELS) == 6
    assert len({m.name for m in MODELS}) == 6


def test_provider_defaults():
    assert default_model("hyperbolic").model_id == "meta-llama/Meta-Llama-3.1-405B-Instruct"
    assert default_model("openrouter").model_id == "nousresearch/hermes-3-llama-3.1-405b"


def test_unknown_provider_default():
    with pytest.raises(ConfigError):
        default_model("nowhere")


def test_find_by_name_or_id():
    assert find_model("meta-llama-3-1-8b-instruct").model_id == \
        "meta-llama/Meta-Llama-3.1-8B-Instruct"
    assert find_model("NousResearch/Hermes-3-Llama-3.1-70B").name == \
        "nous-hermes-3-llama-3-1-70b"


def test_unknown_model_passes_through():
    m = find_model("vendor/new-model")
    assert m.model_id == "vendor/new-model"


def test_select_model_retries_until_valid():
    answers = iter(["0", "abc", "7", "3"])
    out: list[str] = []

    chosen = select_model(input_fn=lambda _p: next(answers), out=out.append)

    assert chosen is MODELS[2]
    assert out.count("Invalid choice. Please try again.") == 3
    assert out[0] == "Select a model:"
