"""Model registry and TOML configuration loader.

Loads model definitions from models.toml and generation defaults from
defaults.toml.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from slidestream.schemas.config import GenerationConfig, ModelConfig, PacingConfig

# Default config directory relative to the slidestream package
_CONFIG_DIR = Path(__file__).parent.parent / "config"


def config_dir() -> Path:
    """Directory holding the shipped models.toml and defaults.toml."""
    return _CONFIG_DIR


def load_models(config_path: Path | None = None) -> dict[str, ModelConfig]:
    """Load the model registry from a TOML file.

    Args:
        config_path: Path to models.toml. Defaults to slidestream/config/models.toml.

    Returns:
        Dictionary mapping model keys to ModelConfig instances.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the TOML structure is invalid.
    """
    path = config_path or _CONFIG_DIR / "models.toml"
    if not path.exists():
        raise FileNotFoundError(f"Model registry not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    models_section = raw.get("models")
    if not models_section or not isinstance(models_section, dict):
        raise ValueError(f"No [models] section found in {path}")

    return {
        key: ModelConfig(**entry)
        for key, entry in models_section.items()
        if isinstance(entry, dict)
    }


def load_generation_config(config_path: Path | None = None) -> GenerationConfig:
    """Load generation defaults from a TOML file.

    Args:
        config_path: Path to defaults.toml. Defaults to slidestream/config/defaults.toml.

    Returns:
        GenerationConfig with values from the TOML file; keys missing from
        the file keep their schema defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    path = config_path or _CONFIG_DIR / "defaults.toml"
    if not path.exists():
        raise FileNotFoundError(f"Generation config not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    section = dict(raw.get("generation", {}))
    pacing = PacingConfig(**section.pop("pacing", {}))
    return GenerationConfig(**section, pacing=pacing)


def resolve_model(registry: dict[str, ModelConfig], key: str) -> ModelConfig:
    """Look up *key* in the registry.

    Raises:
        ValueError: If the key is not registered.
    """
    try:
        return registry[key]
    except KeyError:
        available = ", ".join(sorted(registry)) or "none"
        raise ValueError(f"Unknown model '{key}'. Available: {available}") from None
