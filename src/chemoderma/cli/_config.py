"""Project-level configuration from pyproject.toml.

Reads the [tool.chemoderma] section to provide the default dataset, the
layout collaborator and the spacing presets for the CLI:

    [tool.chemoderma]
    dataset = "public/chemoderma_tree.json"
    layout = "sugiyama"
    node_width = 200
    node_height = 80

    [tool.chemoderma.initial_spacing]
    node_separation = 40
    rank_separation = 200

    [tool.chemoderma.filtered_spacing]
    node_separation = 50
    rank_separation = 250
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from chemoderma.dataset import DEFAULT_DATASET
from chemoderma.viz.layout import FILTERED_SPACING, INITIAL_SPACING, Spacing


@dataclass(frozen=True)
class ExplorerConfig:
    """Configuration from [tool.chemoderma] in pyproject.toml."""

    dataset: str = DEFAULT_DATASET
    layout: str = "sugiyama"
    initial_spacing: Spacing = field(default=INITIAL_SPACING)
    filtered_spacing: Spacing = field(default=FILTERED_SPACING)


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> ExplorerConfig:
    """Load [tool.chemoderma] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.chemoderma] section.
    """
    path = find_pyproject(start)
    if path is None:
        return ExplorerConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        try:
            import tomli as tomllib
        except ImportError:
            return ExplorerConfig()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("chemoderma", {})
    if not section:
        return ExplorerConfig()

    box: dict[str, float] = {}
    if "node_width" in section:
        box["node_width"] = float(section["node_width"])
    if "node_height" in section:
        box["node_height"] = float(section["node_height"])

    return ExplorerConfig(
        dataset=section.get("dataset", DEFAULT_DATASET),
        layout=section.get("layout", "sugiyama"),
        initial_spacing=_spacing(INITIAL_SPACING, box, section.get("initial_spacing", {})),
        filtered_spacing=_spacing(FILTERED_SPACING, box, section.get("filtered_spacing", {})),
    )


def _spacing(preset: Spacing, box: dict[str, float], overrides: dict[str, Any]) -> Spacing:
    values = dict(box)
    for key in ("node_separation", "rank_separation"):
        if key in overrides:
            values[key] = float(overrides[key])
    if "direction" in overrides:
        values["direction"] = str(overrides["direction"])
    return replace(preset, **values)
