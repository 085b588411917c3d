"""HCL loading engine — parse .hcl files into a Workspace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import hcl2
import jinja2

from .workspace import Workspace

logger = logging.getLogger(__name__)

# Config files are templates first; undefined names are errors, not blanks.
_templates = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def scan(
    path: str | Path,
    *,
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> Workspace:
    """Scan a directory for .hcl files and return a ready Workspace."""
    ws = Workspace(context=context)
    ws.scan(path, recurse=recurse)
    return ws


def render(file: Path, context: dict[str, Any] | None = None) -> str:
    """Render a config file through Jinja2."""
    try:
        return _templates.from_string(file.read_text()).render(context or {})
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Render then parse a single HCL file into block dicts."""
    logger.debug("Loading %s", file)
    return hcl2.loads(render(file, context))
