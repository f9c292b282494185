"""Jinja2-backed render engine.

Each invocation owns one RenderEngine: its partial registry and helpers
live on the instance, so engines never leak state into each other.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import ChainableUndefined, DictLoader, Environment, Template, TemplateSyntaxError

from gencoder.errors import ConfigError, RenderError, TemplateCompileError
from gencoder.render.context import RenderContext
from gencoder.render.helpers import BUILTIN_HELPERS

if TYPE_CHECKING:
    from gencoder.render.loader import TemplateFile

logger = logging.getLogger(__name__)


class RenderEngine:
    """Compiles and executes templates against Render Contexts."""

    def __init__(self, builtin_helpers: bool = True) -> None:
        self._partials: dict[str, str] = {}
        self.env = Environment(
            loader=DictLoader(self._partials),
            keep_trailing_newline=True,
            undefined=ChainableUndefined,
        )
        if builtin_helpers:
            for name, func in BUILTIN_HELPERS.items():
                self.register_helper(name, func)

    # ── Registry ────────────────────────────────────────────────────

    def register_partial(self, name: str, source: str) -> None:
        """Make ``source`` includable as ``{% include "<name>" %}``."""
        if name in self._partials:
            logger.debug("partial %s re-registered, previous one replaced", name)
        self._partials[name] = source

    def has_partial(self, name: str) -> bool:
        return name in self._partials

    def register_helper(self, name: str, func: Callable) -> None:
        """Expose ``func`` as filter and global; an existing name is overwritten."""
        self.env.filters[name] = func
        self.env.globals[name] = func

    def load_helper_module(self, path: Path | str) -> list[str]:
        """Import a Python file and register every entry of its ``HELPERS`` dict.

        Returns:
            Names of the registered helpers.
        """
        helper_path = Path(path)
        if not helper_path.is_file():
            raise ConfigError(f"Helper file not found: {helper_path}")

        spec = importlib.util.spec_from_file_location(
            f"gencoder_helpers_{helper_path.stem}", helper_path,
        )
        if spec is None or spec.loader is None:
            raise ConfigError(f"Cannot import helper file: {helper_path}")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ConfigError(f"Cannot import helper file {helper_path}: {e}") from e

        helpers = getattr(module, "HELPERS", None)
        if not isinstance(helpers, dict):
            raise ConfigError(f"{helper_path} does not define a HELPERS dict")
        for name, func in helpers.items():
            self.register_helper(name, func)
        return list(helpers)

    # ── Compile / execute ───────────────────────────────────────────

    def compile(self, source: str, name: str) -> Template:
        try:
            return self.env.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateCompileError(name, f"line {e.lineno}: {e.message}") from e

    def execute(self, template: Template, context: RenderContext, name: str = "<template>") -> str:
        try:
            return template.render(**context.as_template_vars())
        except Exception as e:
            raise RenderError(f"Failed to render {name}: {e}") from e

    def render_output_path(self, tpl: TemplateFile, context: RenderContext) -> str:
        """Render a Template file's output-path expression for one context."""
        path = self.execute(tpl.output_template, context, f"{tpl.name} (output path)").strip()
        if not path:
            raise RenderError(f"Output path of {tpl.name} rendered empty")
        return path

    def render_body(self, tpl: TemplateFile, context: RenderContext) -> str:
        return self.execute(tpl.template, context, tpl.name)
