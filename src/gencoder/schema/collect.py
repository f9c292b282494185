"""Build Render Contexts by introspecting every configured table.

Per database, one SchemaProvider (one pooled Engine) is shared by a task per
table. Results are joined as they complete, so the order of the returned
contexts follows completion order, not configuration order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from multiprocessing.pool import ThreadPool

from gencoder.config.loader import Config, DatabaseConfig, TableConfig
from gencoder.config.properties import resolve_properties
from gencoder.errors import SchemaNotFound
from gencoder.render.context import RenderContext
from gencoder.schema.provider import SchemaProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[DatabaseConfig], SchemaProvider]


def default_provider(db_cfg: DatabaseConfig) -> SchemaProvider:
    return SchemaProvider.from_dsn(db_cfg.dsn)


@dataclass
class CollectionResult:
    """Render Contexts gathered across all databases."""

    contexts: list[RenderContext] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def collect_render_contexts(
    config: Config,
    cli_properties: Mapping[str, str] | None = None,
    max_workers: int | None = None,
    provider_factory: ProviderFactory = default_provider,
) -> CollectionResult:
    """Introspect all configured tables and build their Render Contexts.

    Args:
        config: Loaded configuration.
        cli_properties: Command-line overrides, applied last.
        max_workers: Cap on concurrent introspection tasks per database.
            Defaults to ``config.max_workers``, or one task per table.
        provider_factory: Builds the provider for a database config.

    Returns:
        CollectionResult with contexts and skipped-table warnings.

    Raises:
        SchemaIntrospectionError: On any connectivity or query failure.
    """
    result = CollectionResult()
    cap = max_workers or config.max_workers

    for db_cfg in config.databases:
        if not db_cfg.tables:
            continue
        provider = provider_factory(db_cfg)
        try:
            outcomes = _introspect_tables(provider, db_cfg, cap)
        finally:
            provider.dispose()

        for tb_cfg, outcome in outcomes:
            if isinstance(outcome, SchemaNotFound):
                logger.warning("%s, skipping", outcome)
                result.warnings.append(f"{outcome}, skipped")
                continue
            result.contexts.append(RenderContext(
                table=outcome,
                properties=resolve_properties(
                    config.properties, db_cfg.properties, tb_cfg.properties, cli_properties,
                ),
                config=config,
                database=db_cfg,
                table_config=tb_cfg,
            ))

    return result


def _introspect_tables(provider: SchemaProvider, db_cfg: DatabaseConfig, cap: int | None):
    def task(tb_cfg: TableConfig):
        schema = tb_cfg.schema or db_cfg.schema
        table = provider.introspect(schema, tb_cfg.name, tb_cfg.ignore_columns)
        if table is None:
            return tb_cfg, SchemaNotFound(schema, tb_cfg.name)
        logger.debug("introspected %s.%s (%d columns)", table.schema, table.name, len(table.columns))
        return tb_cfg, table

    # Errors raised in a task re-raise here when its result is consumed
    with ThreadPool(processes=cap or len(db_cfg.tables)) as pool:
        return list(pool.imap_unordered(task, db_cfg.tables))
