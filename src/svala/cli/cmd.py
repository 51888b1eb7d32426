"""
Command-line interface for svala.

This module provides commands for compiling the Scala script blocks of a
Svelte component and for rewriting already compiled Scala.js output.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import asyncio
import logging
import shlex
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from svala.compiler import CompilerConfig, ScalaJsCompiler
from svala.errors import SvalaError
from svala.preprocess import PreprocessResult, ScalaPreprocessor, preprocess_component
from svala.rewrite import rewrite as rewrite_output

cli = typer.Typer(
	name="svala",
	help="svala - Scala.js script blocks for Svelte components",
	no_args_is_help=True,
)


@cli.callback()
def configure(
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
):
	"""Configure logging for all commands."""
	configure_logging(verbose)


@cli.command("rewrite")
def rewrite(
	compiled_js: Path = typer.Argument(..., help="Compiled Scala.js output file"),
	map_file: Path | None = typer.Option(
		None, "--map", help="Source map file (defaults to <compiled_js>.map)"
	),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write the rewritten script here instead of stdout"
	),
	longest_first: bool = typer.Option(
		False,
		"--longest-first",
		help="Apply renames of longer internal names before shorter ones",
	),
):
	"""Rewrite compiled Scala.js output into a Svelte script body."""
	console = Console(stderr=True)
	if not compiled_js.is_file():
		console.log(f"❌ File not found: {compiled_js}")
		raise typer.Exit(1)

	map_path = map_file or compiled_js.with_name(compiled_js.name + ".map")
	map_text = map_path.read_text(encoding="utf-8") if map_path.is_file() else ""

	result = rewrite_output(
		compiled_js.read_text(encoding="utf-8"),
		map_text,
		longest_first=longest_first,
	)
	console.log(f"🔄 Resolved {len(result.aliases)} export aliases")

	if output is None:
		typer.echo(result.code, nl=False)
	else:
		output.write_text(result.code, encoding="utf-8")
		console.log(f"✅ Wrote {output}")


@cli.command("compile")
def compile_component(
	component: Path = typer.Argument(..., help="Svelte component file"),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write the processed component here instead of stdout"
	),
	map_output: Path | None = typer.Option(
		None, "--map-output", help="Write the source map of the first Scala block here"
	),
	project_dir: Path | None = typer.Option(
		None, "--project-dir", help="sbt project directory"
	),
	command: str | None = typer.Option(
		None, "--command", help="Compiler command line, e.g. 'sbt fastOptJS'"
	),
	output_js: str | None = typer.Option(
		None, "--output-js", help="Compiled JS artifact, relative to the project"
	),
	longest_first: bool = typer.Option(
		False,
		"--longest-first",
		help="Apply renames of longer internal names before shorter ones",
	),
):
	"""Compile the Scala script blocks of a Svelte component."""
	console = Console(stderr=True)
	if not component.is_file():
		console.log(f"❌ File not found: {component}")
		raise typer.Exit(1)

	config = CompilerConfig(
		project_dir=project_dir,
		command=shlex.split(command) if command else None,
		output_js=output_js,
	)
	preprocessor = ScalaPreprocessor(
		ScalaJsCompiler(config), longest_first=longest_first
	)

	console.log(f"📁 Processing component: {component}")
	try:
		result = run_preprocess(component.read_text(encoding="utf-8"), preprocessor)
	except SvalaError as exc:
		console.log(f"❌ {exc}")
		raise typer.Exit(1) from None

	if not result.changed:
		console.log("⚠️  No Scala script blocks found")
	else:
		console.log(f"✅ Compiled {len(result.scripts)} Scala script block(s)")

	if map_output is not None and result.scripts:
		map_output.write_text(result.scripts[0].map, encoding="utf-8")

	if output is None:
		typer.echo(result.markup, nl=False)
	else:
		output.write_text(result.markup, encoding="utf-8")
		console.log(f"✅ Wrote {output}")


def run_preprocess(markup: str, preprocessor: ScalaPreprocessor) -> PreprocessResult:
	return asyncio.run(preprocess_component(markup, preprocessor))


def configure_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.WARNING,
		format="%(message)s",
		handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
		force=True,
	)


def main():
	"""Main CLI entry point."""
	try:
		cli()
	except Exception:
		console = Console()
		console.print_exception()
		raise typer.Exit(1) from None


if __name__ == "__main__":
	main()
