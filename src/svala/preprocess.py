"""
Svelte preprocessing of `<script lang="scala">` blocks.

Blocks are located in the component markup, compiled through the Scala.js
toolchain and rewritten; the result replaces the block content while the
tag and its attributes stay as they are.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from svala.compiler import ScalaJsCompiler
from svala.dialect import SCALAJS, Dialect
from svala.rewrite import CompiledScript, rewrite

logger = logging.getLogger(__name__)

Attributes = dict[str, str | bool]

_SCRIPT_RE = re.compile(
	r"<!--.*?-->|<script(\s[^>]*?)?(?:>(.*?)</script>|/>)",
	re.DOTALL,
)
_ATTRIBUTE_RE = re.compile(
	r"""([^\s=/>]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)


@dataclass
class ScriptBlock:
	attributes: Attributes
	content: str
	start: int
	"""Offset of the first content character in the markup."""
	end: int
	"""Offset just past the last content character."""


@dataclass
class PreprocessResult:
	markup: str
	scripts: list[CompiledScript] = field(default_factory=list)

	@property
	def changed(self) -> bool:
		return bool(self.scripts)


def parse_attributes(raw: str) -> Attributes:
	"""Parse a tag's attribute string; valueless attributes map to True."""
	attributes: Attributes = {}
	for match in _ATTRIBUTE_RE.finditer(raw):
		name, double, single, bare = match.groups()
		if double is not None:
			attributes[name] = double
		elif single is not None:
			attributes[name] = single
		elif bare is not None:
			attributes[name] = bare
		else:
			attributes[name] = True
	return attributes


def find_script_blocks(markup: str) -> list[ScriptBlock]:
	"""Return the `<script>` blocks of `markup` that have a body."""
	blocks: list[ScriptBlock] = []
	for match in _SCRIPT_RE.finditer(markup):
		if match.group(0).startswith("<!--") or match.group(2) is None:
			continue
		blocks.append(
			ScriptBlock(
				attributes=parse_attributes(match.group(1) or ""),
				content=match.group(2),
				start=match.start(2),
				end=match.end(2),
			)
		)
	return blocks


class ScalaPreprocessor:
	"""Script preprocessor for blocks tagged `lang="scala"`."""

	name: str = "svelte-scalajs"
	lang: str = "scala"

	compiler: ScalaJsCompiler
	dialect: Dialect
	longest_first: bool

	def __init__(
		self,
		compiler: ScalaJsCompiler | None = None,
		*,
		dialect: Dialect = SCALAJS,
		longest_first: bool = False,
	) -> None:
		self.compiler = compiler or ScalaJsCompiler()
		self.dialect = dialect
		self.longest_first = longest_first

	def handles(self, attributes: Mapping[str, str | bool]) -> bool:
		return attributes.get("lang") == self.lang

	async def script(
		self, content: str, attributes: Mapping[str, str | bool]
	) -> CompiledScript | None:
		"""Compile and rewrite one block, or return None if it is not Scala."""
		if not self.handles(attributes):
			return None
		logger.debug("Compiling Scala script block (%d chars)", len(content))
		source_text, map_text = await self.compiler.compile(content)
		return rewrite(
			source_text,
			map_text,
			dialect=self.dialect,
			longest_first=self.longest_first,
		)


async def preprocess_component(
	markup: str, preprocessor: ScalaPreprocessor
) -> PreprocessResult:
	"""Replace the body of every Scala script block in `markup`."""
	blocks = find_script_blocks(markup)
	try:
		async with asyncio.TaskGroup() as tg:
			tasks = [
				tg.create_task(preprocessor.script(block.content, block.attributes))
				for block in blocks
			]
	except BaseExceptionGroup as group:
		# Siblings are cancelled by the group; surface the failure that caused it
		raise group.exceptions[0] from None
	results = [task.result() for task in tasks]

	pieces: list[str] = []
	scripts: list[CompiledScript] = []
	cursor = 0
	for block, result in zip(blocks, results):
		if result is None:
			continue
		pieces.append(markup[cursor : block.start])
		pieces.append(result.code)
		cursor = block.end
		scripts.append(result)
	pieces.append(markup[cursor:])

	logger.debug("Preprocessed %d of %d script blocks", len(scripts), len(blocks))
	return PreprocessResult(markup="".join(pieces), scripts=scripts)


__all__ = [
	"Attributes",
	"PreprocessResult",
	"ScalaPreprocessor",
	"ScriptBlock",
	"find_script_blocks",
	"parse_attributes",
	"preprocess_component",
]
