from __future__ import annotations

# Public API:
#  • annotate_tree: core pass over a parsed file
#  • process_source / process_file: parse, annotate and render
from .config import GocmtCfg, load_config
from .engine import AnnotateResult, ProcessResult, annotate_tree, process_file, process_source
from .errors import ConfigError, GocmtUserError, ParseFailure, TemplateFormatError
from .syntax import parse_source
from .template import DEFAULT_TEMPLATE, Template

__all__ = [
    "GocmtCfg",
    "load_config",
    "AnnotateResult",
    "ProcessResult",
    "annotate_tree",
    "process_file",
    "process_source",
    "parse_source",
    "Template",
    "DEFAULT_TEMPLATE",
    "GocmtUserError",
    "ParseFailure",
    "TemplateFormatError",
    "ConfigError",
]
