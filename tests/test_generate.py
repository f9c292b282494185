"""End-to-end tests for a generation run."""

from pathlib import Path

import pytest

from gencoder.config.loader import Config, DatabaseConfig, TableConfig
from gencoder.errors import RenderError
from gencoder.generate import GenerationResult, generate

START = "@gencoder.block.start:"
END = "@gencoder.block.end:"


def write(root: Path, rel: str, text: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestGenerate:
    def test_hello_world_and_rerun(self, one_table_config, fake_provider):
        cfg = one_table_config
        write(Path(cfg.templates), "greet.txt.j2",
              "@gencoder.generated: {{table.name}}.txt\nHello, {{properties.name}}!\n")

        result = generate(cfg, provider_factory=lambda _: fake_provider)
        out = Path(cfg.output) / "greet.txt"
        assert result.created == [str(out)]
        first = out.read_bytes()
        assert b"Hello, World!" in first

        again = generate(cfg, provider_factory=lambda _: fake_provider)
        assert again.unchanged == [str(out)]
        assert out.read_bytes() == first

    def test_cli_properties_override(self, one_table_config, fake_provider):
        cfg = one_table_config
        write(Path(cfg.templates), "greet.txt.j2",
              "@gencoder.generated: {{table.name}}.txt\nHello, {{properties.name}}!\n")
        generate(cfg, cli_properties={"name": "CLI"}, provider_factory=lambda _: fake_provider)
        assert "Hello, CLI!" in (Path(cfg.output) / "greet.txt").read_text()

    def test_hand_edits_survive_regeneration(self, one_table_config, fake_provider):
        cfg = one_table_config
        tpl = Path(cfg.templates) / "model.py.j2"
        tpl.write_text(
            "# @gencoder.generated: {{ table.name }}.py\n"
            f"# {START} fields\n"
            "{% for c in table.columns %}{{ c.name }} = None\n{% endfor %}"
            f"# {END} fields\n"
        )
        generate(cfg, provider_factory=lambda _: fake_provider)
        out = Path(cfg.output) / "greet.py"
        out.write_text(out.read_text() + "\ndef custom():\n    return 42\n")

        fake_provider.tables["greet"].columns[1].name = "renamed"
        result = generate(cfg, provider_factory=lambda _: fake_provider)
        text = out.read_text()
        assert result.updated == [str(out)]
        assert "renamed = None" in text
        assert "user_name = None" not in text
        assert "def custom():" in text

    def test_partial_include(self, one_table_config, fake_provider):
        cfg = one_table_config
        write(Path(cfg.templates), "cols.partial.j2",
              "{% for c in table.columns %}{{ c.name }}{% if not loop.last %}, {% endif %}{% endfor %}")
        write(Path(cfg.templates), "sub/list.txt.j2",
              '@gencoder.generated: lists/{{ table.name }}.txt\n{% include "cols.partial.j2" %}\n')
        generate(cfg, provider_factory=lambda _: fake_provider)
        assert "id, user_name" in (Path(cfg.output) / "lists" / "greet.txt").read_text()

    def test_boilerplate_without_databases(self, tmp_path):
        templates = tmp_path / "templates"
        write(templates, "readme.j2", "@gencoder.generated: README.md\n# {{ properties.project }}\n")
        cfg = Config(templates=str(templates), output=str(tmp_path / "out"),
                     properties={"project": "demo"})
        result = generate(cfg)
        assert len(result.created) == 1
        assert "# demo" in (tmp_path / "out" / "README.md").read_text()

    def test_normal_files_copied_once(self, tmp_path):
        templates = tmp_path / "templates"
        write(templates, "static/.editorconfig", "root = true\n")
        out = tmp_path / "out"
        cfg = Config(templates=str(templates), output=str(out))

        result = generate(cfg, include_non_templates=True)
        assert result.created == [str(out / "static" / ".editorconfig")]

        (out / "static" / ".editorconfig").write_text("edited\n")
        again = generate(cfg, include_non_templates=True)
        assert again.skipped == [str(out / "static" / ".editorconfig")]
        assert (out / "static" / ".editorconfig").read_text() == "edited\n"

    def test_normal_files_ignored_by_default(self, tmp_path):
        templates = tmp_path / "templates"
        write(templates, "static.txt", "x")
        cfg = Config(templates=str(templates), output=str(tmp_path / "out"))
        generate(cfg)
        assert not (tmp_path / "out" / "static.txt").exists()

    def test_missing_table_warns_and_continues(self, one_table_config, fake_provider):
        cfg = one_table_config
        cfg.databases[0].tables.append(TableConfig(name="ghost"))
        write(Path(cfg.templates), "t.j2", "@gencoder.generated: {{ table.name }}.txt\nx\n")
        result = generate(cfg, provider_factory=lambda _: fake_provider)
        assert len(result.created) == 1
        assert any("ghost" in w for w in result.warnings)

    def test_render_failure_aborts(self, one_table_config, fake_provider):
        cfg = one_table_config
        write(Path(cfg.templates), "a.j2", '@gencoder.generated: a.txt\n{% include "nope.j2" %}\n')
        with pytest.raises(RenderError):
            generate(cfg, provider_factory=lambda _: fake_provider)

    def test_dry_run_writes_nothing(self, one_table_config, fake_provider):
        cfg = one_table_config
        write(Path(cfg.templates), "t.j2", "@gencoder.generated: {{ table.name }}.txt\nx\n")
        result = generate(cfg, dry_run=True, provider_factory=lambda _: fake_provider)
        assert result.created
        assert not Path(cfg.output).exists()
        assert "[DRY RUN]" in result.summary()

    def test_helper_files_registered(self, one_table_config, fake_provider, tmp_path):
        cfg = one_table_config
        helper = tmp_path / "h.py"
        helper.write_text("HELPERS = {'wrap': lambda s: '<' + s + '>'}\n")
        cfg.helpers = [str(helper)]
        write(Path(cfg.templates), "t.j2", "@gencoder.generated: t.txt\n{{ table.name | wrap }}\n")
        generate(cfg, provider_factory=lambda _: fake_provider)
        assert "<greet>" in (Path(cfg.output) / "t.txt").read_text()

    def test_sqlite_with_init_scaffold(self, tmp_path, sqlite_db, monkeypatch):
        from gencoder.cli.init import SCAFFOLD

        templates = tmp_path / "templates"
        for rel, content in SCAFFOLD.items():
            if rel.startswith("templates/"):
                write(tmp_path, rel, content)
        out = tmp_path / "out"
        cfg = Config(
            templates=str(templates),
            output=str(out),
            databases=[DatabaseConfig(
                dsn=f"sqlite:///{sqlite_db}",
                properties={"package": "com.example"},
                tables=[TableConfig(name="users", ignore_columns=["secret"])],
            )],
        )
        generate(cfg)
        java = out / "src" / "main" / "java" / "com" / "example" / "Users.java"
        text = java.read_text()
        assert "package com.example;" in text
        assert "public record Users (" in text
        assert "Integer id," in text
        assert "String name," in text
        assert "String email" in text
        assert "secret" not in text

        java.write_text(text.replace("public void hello()", "public void bye()"))
        generate(cfg)
        assert "public void bye()" in java.read_text()


class TestGenerationResult:
    def test_summary_counts(self):
        result = GenerationResult(created=["a"], updated=["b", "c"], warnings=["table x not found"])
        summary = result.summary()
        assert "Created:   1" in summary
        assert "Updated:   2" in summary
        assert "table x not found" in summary
