"""Static model registry: review type → models, model id → metadata.

Model ids are the names the LiteLLM proxy routes on. GPT models go through the
OpenAI route and Gemini models through the Google route; Claude is not listed
because it is the reviewer's own host model.

Both tables are read-only after import and are validated once at import time,
so a reference to an unknown model id is a startup failure rather than a
surprise in the middle of a run.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from peerreview_core.errors import ErrorKind, ReviewError
from peerreview_core.models import ModelConfig, ReviewTypeConfig

DEFAULT_REVIEW_TYPE = "general"

_MODELS = [
    ModelConfig(
        id="gpt-5.2",
        display_name="GPT-5.2",
        description="Complex analysis, decision-making, debugging",
        strengths=("analysis", "debugging", "architecture", "decision-making"),
    ),
    ModelConfig(
        id="gpt-5.1",
        display_name="GPT-5.1",
        description="Visual reasoning, general purpose, adaptive",
        strengths=("visual", "general", "api-design", "documentation", "security"),
    ),
    ModelConfig(
        id="gpt-5.1-codex",
        display_name="GPT-5.1 Codex",
        description="Specialized for code engineering tasks",
        strengths=("code", "engineering", "completions", "refactoring"),
    ),
    ModelConfig(
        id="gemini-3-pro",
        display_name="Gemini 3 Pro",
        description="Advanced reasoning across long contexts",
        strengths=("reasoning", "architecture", "long-context", "multimodal"),
    ),
    ModelConfig(
        id="gemini-3-flash",
        display_name="Gemini 3 Flash",
        description="Quick responses for repetitive work",
        strengths=("fast", "lightweight", "repetitive"),
    ),
    ModelConfig(
        id="gemini-2.5-pro",
        display_name="Gemini 2.5 Pro",
        description="Strong reasoning and code understanding",
        strengths=("reasoning", "code", "analysis", "bug-detection"),
    ),
]

# Three models per type. Order matters: it is both the dispatch order and
# the order results are printed in.
_REVIEW_TYPES = {
    "security": ReviewTypeConfig(
        models=("gpt-5.1", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "Injection vulnerabilities (SQL, XSS, command injection)",
            "Authentication and authorization flaws",
            "Data exposure and sensitive information leaks",
            "Input validation and sanitization",
            "Cryptographic issues and secure storage",
            "OWASP Top 10 vulnerabilities",
        ),
    ),
    "architecture": ReviewTypeConfig(
        models=("gpt-5.2", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "Design patterns and anti-patterns",
            "Scalability and maintainability",
            "Separation of concerns",
            "Dependency management",
            "System boundaries and interfaces",
            "Technical debt and coupling",
        ),
    ),
    "bug": ReviewTypeConfig(
        models=("gpt-5.2", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "Logic errors and edge cases",
            "Race conditions and concurrency issues",
            "Null/undefined handling",
            "Error handling completeness",
            "Off-by-one errors and boundary conditions",
            "Resource leaks and cleanup",
        ),
    ),
    "performance": ReviewTypeConfig(
        models=("gpt-5.2", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "Algorithm complexity (time/space)",
            "Database query optimization",
            "Memory usage and allocation",
            "Network and I/O efficiency",
            "Caching opportunities",
            "Bottleneck identification",
        ),
    ),
    "api": ReviewTypeConfig(
        models=("gpt-5.1", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "API design and RESTful principles",
            "Contract clarity and documentation",
            "Error response consistency",
            "Versioning strategy",
            "Rate limiting and pagination",
            "Backward compatibility",
        ),
    ),
    "test": ReviewTypeConfig(
        models=("gpt-5.1-codex", "gemini-2.5-pro", "gemini-3-flash"),
        focus_areas=(
            "Test coverage gaps",
            "Edge case coverage",
            "Mock and stub quality",
            "Test isolation and independence",
            "Assertion quality",
            "Integration test completeness",
        ),
    ),
    "general": ReviewTypeConfig(
        models=("gpt-5.1", "gemini-3-pro", "gemini-2.5-pro"),
        focus_areas=(
            "Code architecture and design",
            "Security implications",
            "Feasibility and implementation concerns",
            "Best practices alignment",
            "Potential pitfalls and edge cases",
            "Suggestions for improvement",
        ),
    ),
}


def validate_registry(models: Mapping[str, ModelConfig], review_types: Mapping[str, ReviewTypeConfig]) -> None:
    """Raise a Config ReviewError if any review type is unusable.

    Every type needs at least one model, and every model id it lists must
    resolve in ``models``.
    """
    for name, type_config in review_types.items():
        if not type_config.models:
            raise ReviewError(ErrorKind.CONFIG, f"Review type {name!r} has no models configured")
        unknown = [m for m in type_config.models if m not in models]
        if unknown:
            raise ReviewError(
                ErrorKind.CONFIG,
                f"Review type {name!r} references unknown model(s): {', '.join(unknown)}",
            )


ALL_MODELS: Mapping[str, ModelConfig] = MappingProxyType({m.id: m for m in _MODELS})
REVIEW_TYPE_MODELS: Mapping[str, ReviewTypeConfig] = MappingProxyType(dict(_REVIEW_TYPES))

validate_registry(ALL_MODELS, REVIEW_TYPE_MODELS)


def review_types() -> list[str]:
    return list(REVIEW_TYPE_MODELS)


def get_review_type(name: str) -> ReviewTypeConfig:
    try:
        return REVIEW_TYPE_MODELS[name]
    except KeyError:
        raise ReviewError(
            ErrorKind.VALIDATION,
            f"Unknown review type: {name}. Valid types: {', '.join(review_types())}",
        ) from None


def get_model(model_id: str) -> ModelConfig | None:
    return ALL_MODELS.get(model_id)


def model_display_name(model_id: str) -> str:
    model = ALL_MODELS.get(model_id)
    return model.display_name if model else model_id
