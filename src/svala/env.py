from __future__ import annotations

import os
import shlex

ENV_SVALA_PROJECT_DIR = "SVALA_PROJECT_DIR"
ENV_SVALA_COMPILE_COMMAND = "SVALA_COMPILE_COMMAND"
ENV_SVALA_SOURCE_DIR = "SVALA_SOURCE_DIR"
ENV_SVALA_OUTPUT_JS = "SVALA_OUTPUT_JS"
ENV_SVALA_OUTPUT_MAP = "SVALA_OUTPUT_MAP"


def _get(name: str) -> str | None:
	value = os.environ.get(name)
	return value if value else None


def _set(name: str, value: str | None) -> None:
	if value is None:
		os.environ.pop(name, None)
	else:
		os.environ[name] = value


class Env:
	"""Typed access to the SVALA_* environment variables."""

	@property
	def project_dir(self) -> str | None:
		return _get(ENV_SVALA_PROJECT_DIR)

	@project_dir.setter
	def project_dir(self, value: str | None) -> None:
		_set(ENV_SVALA_PROJECT_DIR, value)

	@property
	def compile_command(self) -> list[str] | None:
		raw = _get(ENV_SVALA_COMPILE_COMMAND)
		return shlex.split(raw) if raw else None

	@compile_command.setter
	def compile_command(self, value: list[str] | None) -> None:
		_set(ENV_SVALA_COMPILE_COMMAND, shlex.join(value) if value else None)

	@property
	def source_dir(self) -> str | None:
		return _get(ENV_SVALA_SOURCE_DIR)

	@source_dir.setter
	def source_dir(self, value: str | None) -> None:
		_set(ENV_SVALA_SOURCE_DIR, value)

	@property
	def output_js(self) -> str | None:
		return _get(ENV_SVALA_OUTPUT_JS)

	@output_js.setter
	def output_js(self, value: str | None) -> None:
		_set(ENV_SVALA_OUTPUT_JS, value)

	@property
	def output_map(self) -> str | None:
		return _get(ENV_SVALA_OUTPUT_MAP)

	@output_map.setter
	def output_map(self, value: str | None) -> None:
		_set(ENV_SVALA_OUTPUT_MAP, value)


env = Env()
