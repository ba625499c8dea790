"""Configuration loading: TOML file + environment variable overlay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "skillmatch"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "skillmatch"

DEFAULT_CONFIG_TOML = """\
[mongodb]
uri = "mongodb://localhost:27017"
database = "skillmatch"

[inference]
enabled = true
provider = "gemini"
model = ""
max_tokens = 256
temperature = 0.0
timeout = 30.0

[providers.gemini]
api_key_env = "GEMINI_API_KEY"
default_model = "gemini-2.0-flash"

[providers.anthropic]
api_key_env = "ANTHROPIC_API_KEY"
default_model = "claude-sonnet-4-20250514"

[providers.openrouter]
api_key_env = "OPENROUTER_API_KEY"
default_model = "anthropic/claude-sonnet-4"

[providers.llamacpp]
base_url = "http://localhost:8080"
"""


@dataclass
class MongoConfig:
    uri: str = DEFAULT_MONGO_URI
    database: str = DEFAULT_DATABASE


@dataclass
class ProviderConfig:
    api_key_env: str = ""
    api_key: str = ""
    default_model: str = ""
    base_url: str = ""


@dataclass
class InferenceConfig:
    enabled: bool = True
    provider: str = "gemini"
    model: str = ""
    max_tokens: int = 256
    temperature: float = 0.0
    timeout: float = 30.0


@dataclass
class AppConfig:
    mongodb: MongoConfig = field(default_factory=MongoConfig)
    providers: dict[str, ProviderConfig] = field(default_factory=dict)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    config_path: Path = DEFAULT_CONFIG_PATH


def _env_overlay(config: AppConfig) -> None:
    """Override config values with environment variables where applicable."""
    if uri := os.environ.get("MONGODB_URI"):
        config.mongodb.uri = uri
    if db := os.environ.get("SKILLMATCH_DB"):
        config.mongodb.database = db
    if provider := os.environ.get("SKILLMATCH_LLM_PROVIDER"):
        config.inference.provider = provider

    # Resolve API keys from env vars
    for prov in config.providers.values():
        if prov.api_key_env:
            prov.api_key = os.environ.get(prov.api_key_env, "")


def _parse_provider(data: dict) -> ProviderConfig:
    return ProviderConfig(
        api_key_env=data.get("api_key_env", ""),
        default_model=data.get("default_model", ""),
        base_url=data.get("base_url", ""),
    )


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overlay."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        raw = tomllib.loads(DEFAULT_CONFIG_TOML)

    mongo_raw = raw.get("mongodb", {})
    providers_raw = raw.get("providers", {})
    inference_raw = raw.get("inference", {})

    config = AppConfig(
        mongodb=MongoConfig(
            uri=mongo_raw.get("uri", DEFAULT_MONGO_URI),
            database=mongo_raw.get("database", DEFAULT_DATABASE),
        ),
        providers={name: _parse_provider(data) for name, data in providers_raw.items()},
        inference=InferenceConfig(
            enabled=inference_raw.get("enabled", True),
            provider=inference_raw.get("provider", "gemini"),
            model=inference_raw.get("model", ""),
            max_tokens=inference_raw.get("max_tokens", 256),
            temperature=float(inference_raw.get("temperature", 0.0)),
            timeout=float(inference_raw.get("timeout", 30.0)),
        ),
        config_path=path,
    )

    _env_overlay(config)
    return config


def init_config(config_path: Path | None = None) -> Path:
    """Create default config file."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML)
    return path
