"""Tests for the static model registry."""

import pytest

from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.models import ModelConfig, ReviewTypeConfig
from peerreview_core.registry import (
    ALL_MODELS,
    DEFAULT_REVIEW_TYPE,
    REVIEW_TYPE_MODELS,
    get_model,
    get_review_type,
    model_display_name,
    review_types,
    validate_registry,
)


def test_closed_set_of_review_types():
    assert review_types() == ["security", "architecture", "bug", "performance", "api", "test", "general"]
    assert DEFAULT_REVIEW_TYPE in REVIEW_TYPE_MODELS


def test_every_type_has_three_known_models():
    for name, type_config in REVIEW_TYPE_MODELS.items():
        assert len(type_config.models) == 3, name
        assert all(m in ALL_MODELS for m in type_config.models), name
        assert type_config.focus_areas, name


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        REVIEW_TYPE_MODELS["new"] = ReviewTypeConfig(models=("gpt-5.1",))  # type: ignore[index]


def test_security_models_in_dispatch_order():
    assert get_review_type("security").models == ("gpt-5.1", "gemini-3-pro", "gemini-2.5-pro")


def test_get_review_type_unknown_raises_validation():
    with pytest.raises(ReviewError) as exc_info:
        get_review_type("style")
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert "security" in str(exc_info.value)


def test_get_model_and_display_name():
    assert get_model("gpt-5.1-codex").display_name == "GPT-5.1 Codex"
    assert get_model("nope") is None
    assert model_display_name("gemini-3-flash") == "Gemini 3 Flash"
    assert model_display_name("nope") == "nope"


class TestValidateRegistry:
    def test_accepts_consistent_tables(self):
        validate_registry(ALL_MODELS, REVIEW_TYPE_MODELS)

    def test_rejects_unknown_model_reference(self):
        models = {"a": ModelConfig(id="a", display_name="A", description="a")}
        types = {"general": ReviewTypeConfig(models=("a", "missing"))}
        with pytest.raises(ReviewError) as exc_info:
            validate_registry(models, types)
        assert exc_info.value.kind is ErrorKind.CONFIG
        assert "missing" in str(exc_info.value)

    def test_rejects_empty_model_list(self):
        with pytest.raises(ReviewError) as exc_info:
            validate_registry({}, {"general": ReviewTypeConfig(models=())})
        assert exc_info.value.kind is ErrorKind.CONFIG
