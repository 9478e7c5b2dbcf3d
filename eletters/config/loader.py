"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ElettersConfig


def load_config(cli_path: str | None = None) -> ElettersConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./eletters.yaml"),
        Path.home() / ".eletters" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return ElettersConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return ElettersConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `eletters config init`
DEFAULT_CONFIG_TEMPLATE = """\
# eletters.yaml

# AI drafting: primary is tried first, secondary when it fails
llm:
  primary:
    provider: "google"         # google | openai
    model: "gemini-1.5-flash"
    api_key_env: "GEMINI_API_KEY"
    max_tokens: 4096
    temperature: 0.4
    timeout: 30
  secondary:
    provider: "openai"
    model: "gpt-4.1-mini"
    api_key_env: "OPENAI_API_KEY"
    temperature: 0.4
  # secondary: null            # disable the fallback provider

# Draft service used by `eletters draft` (falls back to local logic)
remote:
  enabled: true
  base_url: "http://127.0.0.1:8000"
  timeout: 15

# Questionnaire import
importer:
  max_file_size_mb: 10
  layout: "single"             # single | per-question

# Local draft and template store
storage:
  path: ".eletters/store.json"

# HTTP service (`eletters serve`)
server:
  host: "127.0.0.1"
  port: 8000

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
