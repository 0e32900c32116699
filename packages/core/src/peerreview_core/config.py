import json
import logging
import math
import os
from pathlib import Path
from typing import Optional

import yaml

from peerreview_core.errors import ErrorKind, ReviewError

logger = logging.getLogger(__name__)

ENV_BASE_URL = "LITELLM_BASE_URL"
ENV_API_KEY = "LITELLM_API_KEY"

DEFAULT_CONFIG: dict = {
    "base_url": "http://localhost:4000/v1",
    "timeout_seconds": 300,
    "max_tokens": 4096,
    "plans_dir": "~/.claude/plans",
}

ESTIMATED_TOKENS_PER_CHAR = 0.25
MAX_CONTEXT_TOKENS = 100_000


def secrets_path() -> Path:
    return Path.home() / ".claude" / "secrets.json"


def load_secrets() -> dict:
    """Return the ``litellm`` section of ~/.claude/secrets.json, or {}.

    A missing or malformed file is treated as absent.
    """
    path = secrets_path()
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable secrets file %s: %s", path, e)
        return {}
    section = data.get("litellm") if isinstance(data, dict) else None
    return section if isinstance(section, dict) else {}


def load_config(config_path: str = ".peerreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .peerreview.yml in the current directory
      3. CLI argument overrides

    Proxy credentials come from LITELLM_BASE_URL / LITELLM_API_KEY, falling
    back to ~/.claude/secrets.json. The API key is never read from the YAML
    file since that file usually lives in the repository.
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ReviewError(ErrorKind.CONFIG, f"Invalid YAML in {config_path}", details=str(e)) from e
        if not isinstance(file_config, dict):
            raise ReviewError(ErrorKind.CONFIG, f"{config_path} must contain a mapping of settings")
        file_config.pop("api_key", None)
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    secrets = load_secrets()
    config["base_url"] = os.environ.get(ENV_BASE_URL) or secrets.get("base_url") or config["base_url"]
    config["api_key"] = os.environ.get(ENV_API_KEY) or secrets.get("api_key")
    config["plans_dir"] = str(Path(config["plans_dir"]).expanduser())

    return config


def require_api_key(config: dict) -> str:
    api_key = config.get("api_key")
    if not api_key:
        raise ReviewError(
            ErrorKind.CONFIG,
            f"LiteLLM API key not configured. Set {ENV_API_KEY} environment variable "
            "or add litellm.api_key to ~/.claude/secrets.json",
        )
    return api_key


def estimate_tokens(text: str) -> int:
    """Rough token count from character length; not a tokenizer."""
    return math.ceil(len(text) * ESTIMATED_TOKENS_PER_CHAR)
