from __future__ import annotations

import asyncio
import contextlib
import logging
import secrets
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from svala.env import env
from svala.errors import (
	CompilationError,
	CompilerNotFoundError,
	MissingArtifactError,
)

logger = logging.getLogger(__name__)

DEFAULT_COMMAND: tuple[str, ...] = ("sbt", "fastOptJS")
DEFAULT_SOURCE_DIR = "tmp"
DEFAULT_SOURCE_NAME = "Script.scala"
DEFAULT_OUTPUT_JS = "target/scala-3.3.3/svala-fastopt.js"

SOURCE_PLACEHOLDER = "{source}"
WORKDIR_PLACEHOLDER = "{workdir}"


def _expand(value: str, *, source: Path, workdir: Path) -> str:
	return value.replace(SOURCE_PLACEHOLDER, str(source)).replace(
		WORKDIR_PLACEHOLDER, str(workdir)
	)


@dataclass
class CompilerConfig:
	"""
	Configuration for the external Scala.js toolchain.

	Unset fields fall back to the SVALA_* environment variables, then to the
	sbt defaults. Command arguments and output paths may contain `{source}`
	and `{workdir}`, which are filled in for every compilation.
	"""

	project_dir: Path | str | None = None
	"""Directory the compiler runs in. Relative paths below are anchored here."""

	command: Sequence[str] | None = None
	"""Compiler argv, e.g. `("sbt", "fastOptJS")`."""

	source_dir: Path | str | None = None
	"""Directory receiving one work directory per compilation."""

	source_name: str = DEFAULT_SOURCE_NAME
	"""File name of the Scala source inside the work directory."""

	output_js: Path | str | None = None
	"""Compiled JavaScript artifact."""

	output_map: Path | str | None = None
	"""Source map artifact. Defaults to `output_js` + `.map`."""

	@property
	def resolved_project_dir(self) -> Path:
		"""Resolve the compiler working directory.

		Precedence:
		  1) Explicit `project_dir`
		  2) Env var `SVALA_PROJECT_DIR`
		  3) Current working directory
		"""
		if self.project_dir is not None:
			return Path(self.project_dir)
		if env.project_dir:
			return Path(env.project_dir)
		return Path.cwd()

	@property
	def resolved_command(self) -> list[str]:
		if self.command:
			return list(self.command)
		return env.compile_command or list(DEFAULT_COMMAND)

	@property
	def resolved_source_dir(self) -> Path:
		sd = Path(self.source_dir or env.source_dir or DEFAULT_SOURCE_DIR)
		if sd.is_absolute():
			return sd
		return self.resolved_project_dir / sd

	@property
	def output_js_template(self) -> str:
		return str(self.output_js or env.output_js or DEFAULT_OUTPUT_JS)

	@property
	def output_map_template(self) -> str:
		explicit = self.output_map or env.output_map
		if explicit:
			return str(explicit)
		return self.output_js_template + ".map"

	@property
	def isolated_outputs(self) -> bool:
		"""Whether every compilation writes its artifacts to its own location."""
		return all(
			SOURCE_PLACEHOLDER in tpl or WORKDIR_PLACEHOLDER in tpl
			for tpl in (self.output_js_template, self.output_map_template)
		)


class ScalaJsCompiler:
	"""Runs the Scala.js toolchain on one script body at a time."""

	config: CompilerConfig
	_lock: asyncio.Lock | None

	def __init__(self, config: CompilerConfig | None = None) -> None:
		self.config = config or CompilerConfig()
		# Fixed artifact paths would be overwritten by concurrent runs
		self._lock = None if self.config.isolated_outputs else asyncio.Lock()

	async def compile(self, source: str) -> tuple[str, str]:
		"""Compile `source` and return the JavaScript and source map text."""
		if self._lock is None:
			return await self._compile(source)
		async with self._lock:
			return await self._compile(source)

	async def _compile(self, source: str) -> tuple[str, str]:
		cfg = self.config
		project_dir = cfg.resolved_project_dir
		source_root = cfg.resolved_source_dir
		source_root.mkdir(parents=True, exist_ok=True)

		workdir = source_root / secrets.token_hex(8)
		workdir.mkdir()
		source_path = workdir / cfg.source_name
		try:
			source_path.write_text(source, encoding="utf-8")

			args = [
				_expand(arg, source=source_path, workdir=workdir)
				for arg in cfg.resolved_command
			]
			logger.debug("Running %s in %s", " ".join(args), project_dir)
			try:
				proc = await asyncio.create_subprocess_exec(
					*args,
					cwd=project_dir,
					stdout=asyncio.subprocess.PIPE,
					stderr=asyncio.subprocess.STDOUT,
				)
			except FileNotFoundError as exc:
				msg = f"Scala.js compiler not found: {args[0]}"
				raise CompilerNotFoundError(msg) from exc
			try:
				stdout, _ = await proc.communicate()
			except BaseException:
				# The work directory is removed below, the child must not outlive it
				with contextlib.suppress(ProcessLookupError):
					proc.kill()
				await proc.wait()
				raise
			output = stdout.decode(errors="replace") if stdout else ""
			if proc.returncode != 0:
				raise CompilationError(proc.returncode or 1, output)

			js_path = project_dir / _expand(
				cfg.output_js_template, source=source_path, workdir=workdir
			)
			map_path = project_dir / _expand(
				cfg.output_map_template, source=source_path, workdir=workdir
			)
			return _read_artifact(js_path), _read_artifact(map_path)
		finally:
			shutil.rmtree(workdir, ignore_errors=True)


def _read_artifact(path: Path) -> str:
	if not path.is_file():
		raise MissingArtifactError(f"Compiler output not found: {path}")
	return path.read_text(encoding="utf-8")


__all__ = [
	"DEFAULT_COMMAND",
	"DEFAULT_OUTPUT_JS",
	"CompilerConfig",
	"ScalaJsCompiler",
]
