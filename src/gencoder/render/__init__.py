"""Render module — template loading, helpers and the render engine."""

from gencoder.render.context import RenderContext
from gencoder.render.engine import RenderEngine
from gencoder.render.loader import FileKind, TemplateFile, load_templates

__all__ = [
    "RenderContext",
    "RenderEngine",
    "FileKind",
    "TemplateFile",
    "load_templates",
]
