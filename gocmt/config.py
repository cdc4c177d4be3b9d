"""
Configuration for gocmt runs: template, per-entry commenting, exclusions.
Loaded from an optional YAML file and overridden by command-line flags.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .template import DEFAULT_TEMPLATE, Template

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

CONFIG_FILENAMES = (".gocmt.yml", ".gocmt.yaml")


@dataclass(frozen=True)
class GocmtCfg:
    """Settings of one comment synthesis pass."""
    template: str = DEFAULT_TEMPLATE
    paren_comment: bool = False  # comment every exported entry of a (...) var/const group
    exclude: List[str] = field(default_factory=lambda: ["vendor/"])  # gitwildmatch patterns

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> GocmtCfg:
        """Load configuration from YAML dictionary."""
        if not d:
            return GocmtCfg()

        unknown = set(d) - {"template", "paren_comment", "exclude"}
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        cfg = GocmtCfg()
        template = d.get("template", cfg.template)
        if not isinstance(template, str):
            raise ConfigError("'template' must be a string")
        exclude = d.get("exclude", cfg.exclude)
        if isinstance(exclude, str):
            exclude = [exclude]
        if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
            raise ConfigError("'exclude' must be a list of patterns")

        return GocmtCfg(
            template=template,
            paren_comment=bool(d.get("paren_comment", cfg.paren_comment)),
            exclude=list(exclude),
        )

    def with_overrides(self, **overrides: Any) -> GocmtCfg:
        """Copy with the given non-None values replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def make_template(self) -> Template:
        return Template(self.template)


def _read_yaml_map(path: Path) -> dict:
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def find_config(root: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Optional[Path] = None, *, root: Optional[Path] = None) -> GocmtCfg:
    """
    Load configuration.

    Args:
        path: Explicit config file (must exist)
        root: Directory searched for .gocmt.yml when no path is given

    Returns:
        Loaded configuration, or defaults when no file is found
    """
    if path is None:
        path = find_config(root or Path.cwd())
        if path is None:
            return GocmtCfg()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)
    return GocmtCfg.from_dict(_read_yaml_map(path))


__all__ = ["GocmtCfg", "load_config", "find_config", "CONFIG_FILENAMES"]
