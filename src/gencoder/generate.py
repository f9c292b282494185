"""Generation run — render every template for every table and write it out.

The run:
1. Register helpers on a fresh RenderEngine
2. Resolve the template source (cloning once if remote), load and classify it
3. Copy non-template files when asked, never overwriting
4. Introspect all configured tables (concurrently per database)
5. Render each context × template and merge it into the output tree

Any failure except a missing table aborts the run. Files already written
stay written; regeneration is idempotent, so rerunning after a fix is safe.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from gencoder.config.loader import Config
from gencoder.config.properties import resolve_properties
from gencoder.merge.materialize import copy_if_absent, materialize
from gencoder.render.context import RenderContext
from gencoder.render.engine import RenderEngine
from gencoder.render.loader import FileKind, TemplateFile, load_templates
from gencoder.render.source import resolve_template_source
from gencoder.schema.collect import ProviderFactory, collect_render_contexts, default_provider

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    dry_run: bool = False

    def record(self, action: str, path: Path) -> None:
        getattr(self, action).append(str(path))

    def summary(self) -> str:
        lines = ["Generation Results", "─" * 40]
        lines.append(f"  Created:   {len(self.created)}")
        lines.append(f"  Updated:   {len(self.updated)}")
        lines.append(f"  Unchanged: {len(self.unchanged)}")
        if self.skipped:
            lines.append(f"  Skipped:   {len(self.skipped)}")
        if self.warnings:
            lines.append(f"\nWARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  - {w}")
        if self.dry_run:
            lines.append("\n[DRY RUN] No files were modified.")
        return "\n".join(lines)


def generate(
    config: Config,
    cli_properties: Mapping[str, str] | None = None,
    include_non_templates: bool = False,
    helper_files: list[str] | None = None,
    max_workers: int | None = None,
    dry_run: bool = False,
    engine: RenderEngine | None = None,
    provider_factory: ProviderFactory = default_provider,
) -> GenerationResult:
    """Run a full generation for ``config``.

    Args:
        config: Loaded configuration, with CLI overrides already applied.
        cli_properties: Command-line property overrides (highest precedence).
        include_non_templates: Copy non-template files into the output tree.
        helper_files: Extra helper modules, registered before config helpers.
        max_workers: Cap on concurrent table introspection.
        dry_run: Report actions without writing.
        engine: Render engine to use; a fresh one by default.
        provider_factory: Builds the schema provider for each database.

    Returns:
        GenerationResult listing every output path by action.
    """
    engine = engine or RenderEngine()
    for helper in [*(helper_files or []), *config.helpers]:
        names = engine.load_helper_module(helper)
        logger.debug("registered helpers %s from %s", ", ".join(names), helper)

    result = GenerationResult(dry_run=dry_run)
    output_root = Path(config.output)

    with resolve_template_source(config.templates) as templates_dir:
        files = load_templates(templates_dir, config, engine, include_non_templates)

    if include_non_templates:
        for f in files:
            if f.kind is FileKind.NORMAL:
                out = output_root / f.relative_path
                result.record(copy_if_absent(out, f.content, dry_run), out)

    collected = collect_render_contexts(
        config, cli_properties, max_workers=max_workers, provider_factory=provider_factory,
    )
    result.warnings.extend(collected.warnings)
    contexts = collected.contexts

    if not contexts:
        # No tables: render boilerplate once with global properties only
        contexts = [RenderContext(
            properties=resolve_properties(config.properties, cli_properties),
            config=config,
        )]

    templates = [f for f in files if f.kind is FileKind.TEMPLATE]
    for ctx in contexts:
        for tpl in templates:
            render_to_file(engine, tpl, ctx, config, output_root, result)

    return result


def render_to_file(
    engine: RenderEngine,
    tpl: TemplateFile,
    ctx: RenderContext,
    config: Config,
    output_root: Path,
    result: GenerationResult,
) -> Path:
    """Render one template for one context and materialize it."""
    out = output_root / engine.render_output_path(tpl, ctx)
    content = engine.render_body(tpl, ctx)
    action = materialize(out, content, config.block_marker, dry_run=result.dry_run)
    result.record(action, out)
    return out
