"""Configuration for the data dictionary service."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_ENV_VAR = "DDIC_CONFIG"


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8060
    reload: bool = False


@dataclass
class StorageConfig:
    """Snapshot storage configuration."""
    # Snapshot file (.json, or .yaml/.yml)
    snapshot_path: str = "data/dictionary.json"

    # Load the snapshot at startup if it exists
    load_on_startup: bool = True

    # Write the snapshot back when the service stops
    save_on_shutdown: bool = False


@dataclass
class BootstrapConfig:
    """Startup content for a dictionary that was not loaded from storage."""
    patient_schema: bool = False


@dataclass
class Config:
    """Main configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    bootstrap: BootstrapConfig = field(default_factory=BootstrapConfig)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            server=ServerConfig(**data.get("server", {})),
            storage=StorageConfig(**data.get("storage", {})),
            bootstrap=BootstrapConfig(**data.get("bootstrap", {})),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load config from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> Config:
        """Load config from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration.

    Uses path if given, else the file named by DDIC_CONFIG, else defaults.
    .json files are read as JSON, anything else as YAML.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Config()
    if Path(path).suffix.lower() == ".json":
        return Config.from_json(path)
    return Config.from_yaml(path)
