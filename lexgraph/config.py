"""Editing session configuration, optionally loaded from TOML (lexgraph.toml).

Config file is looked up in order:
  1. Path in LEXGRAPH_CONFIG env var (if set)
  2. lexgraph.toml in the lexgraph package directory
  3. lexgraph.toml in the current working directory

The first existing file wins. If none is found, or a value is missing or has
the wrong type, the built-in defaults below are used.

Example:

    [session]
    auto_suggest = true
    document_limit = 50
    provision_limit = 200

    [graph]
    node_identity = "provision"   # or "role" for legacy split nodes
    source_x = 100
    target_x = 500
    row_height = 150
    row_offset = 100
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from lexschema.graph import NodeIdentity

CONFIG_ENV = "LEXGRAPH_CONFIG"
CONFIG_FILENAME = "lexgraph.toml"


class LayoutConfig(BaseModel, frozen=True):
    """Cosmetic default node coordinates: two columns, one row per relation."""

    source_x: float = 100.0
    target_x: float = 500.0
    row_height: float = Field(default=150.0, gt=0)
    row_offset: float = 100.0


class SessionConfig(BaseModel, frozen=True):
    """Settings for one editing session."""

    auto_suggest: bool = Field(
        default=True,
        description="Propose a relation kind from the selected documents' source kinds.",
    )
    document_limit: int = Field(default=50, ge=1, description="Max documents per lookup.")
    provision_limit: int = Field(default=200, ge=1, description="Max provisions per lookup.")
    node_identity: NodeIdentity = Field(
        default=NodeIdentity.PROVISION,
        description="How graph nodes are deduplicated.",
    )
    layout: LayoutConfig = Field(default_factory=LayoutConfig)


def _default_config_paths() -> list[Path]:
    """Return paths to check for lexgraph.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV):
        paths.append(Path(os.environ[CONFIG_ENV]))
    paths.append(Path(__file__).resolve().parent / CONFIG_FILENAME)
    paths.append(Path.cwd() / CONFIG_FILENAME)
    return paths


def _merge_valid(model: type[BaseModel], section: Any) -> dict[str, Any]:
    """Keep only the keys of `section` that validate on their own."""
    if not isinstance(section, dict):
        return {}
    out: dict[str, Any] = {}
    for key, value in section.items():
        if key not in model.model_fields:
            continue
        try:
            model.model_validate({key: value})
        except ValidationError:
            continue
        out[key] = value
    return out


def config_from_mapping(data: dict[str, Any]) -> SessionConfig:
    """Build a SessionConfig from parsed TOML, ignoring invalid entries."""
    session = _merge_valid(SessionConfig, data.get("session"))
    session.pop("layout", None)
    graph = data.get("graph") if isinstance(data.get("graph"), dict) else {}
    if "node_identity" in graph:
        session.update(_merge_valid(SessionConfig, {"node_identity": graph["node_identity"]}))
    layout = _merge_valid(LayoutConfig, graph)
    return SessionConfig(**session, layout=LayoutConfig(**layout))


def load_session_config(path: Path | None = None) -> SessionConfig:
    """Load session config from TOML.

    Args:
        path: Explicit file to read. When omitted the default search paths
            are tried in order.

    Returns:
        The parsed SessionConfig, or defaults when no readable file exists.
    """
    candidates = [path] if path is not None else _default_config_paths()
    for candidate in candidates:
        if candidate.is_file():
            try:
                with open(candidate, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            return config_from_mapping(data)
    return SessionConfig()
