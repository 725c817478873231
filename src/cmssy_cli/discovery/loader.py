"""Read ``block_config.py`` declarations without executing them.

The file is parsed with :mod:`ast`; the top-level ``define_block(...)`` or
``define_template(...)`` call is located and its arguments evaluated with
:func:`ast.literal_eval`. Anything that is not a literal is rejected.
"""

from __future__ import annotations

import ast
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from cmssy_cli.client.errors import ConfigLoadError
from cmssy_cli.config.constants import RESOURCE_CONFIG_FILE
from cmssy_cli.models.resource import (
    BlockConfig,
    ResourceConfig,
    ResourceKind,
    TemplateConfig,
)

DEFINE_KINDS: dict[str, ResourceKind] = {
    "define_block": "block",
    "define_template": "template",
}


class ConfigDeclaration(BaseModel):
    """Literal arguments of a define call, not yet validated."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    path: Path
    values: dict[str, Any]

    def to_config(self) -> ResourceConfig:
        model = TemplateConfig if self.kind == "template" else BlockConfig
        return model.model_validate(self.values)


ConfigLoader = Callable[[Path], ConfigDeclaration | None]


def _define_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _find_define_call(tree: ast.Module) -> tuple[ast.Call, str] | None:
    for stmt in tree.body:
        if isinstance(stmt, (ast.Assign, ast.AnnAssign, ast.Expr)):
            value = stmt.value
            if isinstance(value, ast.Call):
                name = _define_name(value.func)
                if name in DEFINE_KINDS:
                    return value, name
    return None


def _literal(node: ast.expr, path: Path, what: str) -> Any:
    try:
        return ast.literal_eval(node)
    except (ValueError, TypeError, SyntaxError) as exc:
        raise ConfigLoadError(
            f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: "
            f"{what} must be a literal value ({exc})"
        ) from exc


def parse_config_source(source: str, path: Path) -> ConfigDeclaration:
    """Extract the declaration from ``block_config.py`` source text."""
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        raise ConfigLoadError(
            f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: {exc}"
        ) from exc

    found = _find_define_call(tree)
    if found is None:
        raise ConfigLoadError(
            f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: "
            "no top-level define_block(...) or define_template(...) call"
        )
    call, name = found
    kind = DEFINE_KINDS[name]

    values: dict[str, Any] = {}
    if call.args:
        if len(call.args) > 1:
            raise ConfigLoadError(
                f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: "
                f"{name}() takes a single dict or keyword arguments"
            )
        positional = _literal(call.args[0], path, f"{name}() argument")
        if not isinstance(positional, dict):
            raise ConfigLoadError(
                f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: "
                f"{name}() positional argument must be a dict"
            )
        values.update(positional)
    for keyword in call.keywords:
        if keyword.arg is None:
            raise ConfigLoadError(
                f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: "
                "**kwargs are not supported"
            )
        values[keyword.arg] = _literal(keyword.value, path, f"'{keyword.arg}'")

    return ConfigDeclaration(kind=kind, path=path, values=values)


def load_resource_config(resource_dir: Path) -> ConfigDeclaration | None:
    """Return the declaration in *resource_dir*, or None when there is none."""
    path = resource_dir / RESOURCE_CONFIG_FILE
    if not path.is_file():
        return None
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(
            f"Failed to load {RESOURCE_CONFIG_FILE} at {path}: {exc}"
        ) from exc
    return parse_config_source(source, path)
