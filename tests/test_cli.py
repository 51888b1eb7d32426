import logging
import shlex
import sys
from pathlib import Path

import click
import pytest
import typer
from rich.logging import RichHandler
from svala.cli.cmd import cli
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger():  # pyright: ignore[reportUnusedFunction]
	root = logging.getLogger()
	level, handlers = root.level, list(root.handlers)
	yield
	for handler in list(root.handlers):
		if handler not in handlers:
			root.removeHandler(handler)
	for handler in handlers:
		if handler not in root.handlers:
			root.addHandler(handler)
	root.setLevel(level)


def test_rewrite_to_stdout(tmp_path: Path):
	compiled = tmp_path / "main.js"
	compiled.write_text("export { $x as scala_x };\nvar $x = 1;")
	result = runner.invoke(cli, ["rewrite", str(compiled)])
	assert result.exit_code == 0, result.output
	assert "\nlet scala_x = 1;" in result.stdout


def test_rewrite_to_file(tmp_path: Path):
	compiled = tmp_path / "main.js"
	compiled.write_text("export { $a as X, $ab as Y };\nvar $ab = $a;")
	out = tmp_path / "out.js"
	result = runner.invoke(
		cli, ["rewrite", str(compiled), "--output", str(out), "--longest-first"]
	)
	assert result.exit_code == 0, result.output
	assert out.read_text() == "\nlet Y = X;"


def test_verbose_logs_debug_lines(tmp_path: Path):
	compiled = tmp_path / "main.js"
	compiled.write_text("export { $x as scala_x };\nvar $x = 1;")
	result = runner.invoke(cli, ["--verbose", "rewrite", str(compiled)])
	assert result.exit_code == 0, result.output
	assert "Rewrote" in result.output
	assert "DEBUG" in result.output
	assert logging.getLogger().level == logging.DEBUG
	assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)


def test_quiet_by_default(tmp_path: Path):
	compiled = tmp_path / "main.js"
	compiled.write_text("var $x = 1;")
	result = runner.invoke(cli, ["rewrite", str(compiled)])
	assert result.exit_code == 0, result.output
	assert "Rewrote" not in result.output
	assert logging.getLogger().level == logging.WARNING


def test_rewrite_missing_file(tmp_path: Path):
	result = runner.invoke(cli, ["rewrite", str(tmp_path / "missing.js")])
	assert result.exit_code == 1


def test_compile_component(tmp_path: Path, fake_compiler_script: Path):
	project = tmp_path / "project"
	project.mkdir()
	component = tmp_path / "Counter.svelte"
	component.write_text('<script lang="scala">object Main</script>\n<p>{content}</p>\n')
	out = tmp_path / "Counter.out.svelte"
	map_out = tmp_path / "Counter.js.map"
	command = shlex.join(
		[sys.executable, str(fake_compiler_script), "{source}", "out/main.js"]
	)

	result = runner.invoke(
		cli,
		[
			"compile",
			str(component),
			"--project-dir",
			str(project),
			"--command",
			command,
			"--output-js",
			"out/main.js",
			"--output",
			str(out),
			"--map-output",
			str(map_out),
		],
	)

	assert result.exit_code == 0, result.output
	processed = out.read_text()
	assert 'let content = "object Main";' in processed
	assert "export" not in processed
	assert processed.endswith("</script>\n<p>{content}</p>\n")
	assert map_out.read_text().startswith('{"version":3')


def test_compile_reports_compiler_failure(tmp_path: Path, fake_compiler_script: Path):
	project = tmp_path / "project"
	project.mkdir()
	component = tmp_path / "Broken.svelte"
	component.write_text('<script lang="scala">fail</script>\n')
	command = shlex.join(
		[sys.executable, str(fake_compiler_script), "{source}", "out/main.js"]
	)

	result = runner.invoke(
		cli,
		[
			"compile",
			str(component),
			"--project-dir",
			str(project),
			"--command",
			command,
			"--output-js",
			"out/main.js",
		],
	)
	assert result.exit_code == 1


def test_compile_without_scala_blocks(tmp_path: Path):
	component = tmp_path / "Plain.svelte"
	component.write_text("<script>let a = 1;</script>\n")
	result = runner.invoke(cli, ["compile", str(component), "--project-dir", str(tmp_path)])
	assert result.exit_code == 0, result.output
	assert "<script>let a = 1;</script>" in result.stdout


def test_every_option_has_help():
	group = typer.main.get_command(cli)
	assert isinstance(group, click.Group)
	for name in ("rewrite", "compile"):
		command = group.commands[name]
		for param in command.params:
			if isinstance(param, click.Option):
				assert param.help, f"{name} {param.opts} has no help text"
