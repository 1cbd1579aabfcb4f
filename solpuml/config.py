"""Configuration loading for solpuml (.solpuml.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".solpuml.yml"
DEFAULT_INPUT_PATH = "contracts"
DEFAULT_OUTPUT_FILE = "diagram.puml"
DEFAULT_EXTENSIONS = (".sol",)


@dataclass
class DiagramConfig:
    """Represents the settings defined in .solpuml.yml."""

    root: Path
    input_path: Optional[Path] = None
    output_file: Optional[Path] = None
    jobs: Optional[int] = None
    exclude_paths: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


def load_config(config_path: Path) -> DiagramConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DiagramConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    input_path = _as_str(data.get("input_path"))
    output_file = _as_str(data.get("output_file"))
    jobs = _as_int(data.get("jobs"))
    if jobs is not None and jobs < 1:
        raise ConfigError("jobs must be a positive integer")

    extensions = [_normalise_extension(ext) for ext in _as_str_list(data.get("extensions"))]

    return DiagramConfig(
        root=root,
        input_path=root / input_path if input_path else None,
        output_file=root / output_file if output_file else None,
        jobs=jobs,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        extensions=extensions or list(DEFAULT_EXTENSIONS),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_INPUT_PATH",
    "DEFAULT_OUTPUT_FILE",
    "DiagramConfig",
    "load_config",
]
