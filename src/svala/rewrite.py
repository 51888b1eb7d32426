"""
Text rewrite of Scala.js output into a Svelte-compatible script body.

Generated Scala.js code:
- ends with `export { internal as public };` statements, which are not
  allowed inside a component script
- uses `$` as an identifier prefix, which Svelte reserves for stores
- declares everything with `var`, which fails when the same name is
  re-declared in another scope

The passes are plain text substitutions and assume compiler-generated input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from svala.dialect import SCALAJS, Dialect

logger = logging.getLogger(__name__)

ExportAliases = dict[str, str]
"""Internal (mangled) name -> public name, in discovery order."""


@dataclass
class CompiledScript:
	"""Rewritten script body together with its untouched source map."""

	code: str
	map: str
	aliases: ExportAliases = field(default_factory=dict)

	def to_dict(self) -> dict[str, str]:
		return {"code": self.code, "map": self.map}


def resolve_exports(
	text: str, dialect: Dialect = SCALAJS
) -> tuple[ExportAliases, str]:
	"""Collect export aliases and strip every export statement from `text`.

	`a as b` maps `a` to `b`; a bare `a` maps to itself. Entries are not
	validated beyond splitting, so an entry with several `as` keeps only the
	first two names.
	"""
	aliases: ExportAliases = {}

	def _collect(match: re.Match[str]) -> str:
		for item in match.group(1).split(","):
			entry = item.strip()
			if not entry:
				continue
			parts = [part.strip() for part in dialect.alias_separator.split(entry)]
			internal = parts[0]
			public = parts[1] if len(parts) > 1 else internal
			aliases[internal] = public
		return ""

	stripped = dialect.export_pattern.sub(_collect, text)
	return aliases, stripped


def apply_renames(
	text: str, aliases: Mapping[str, str], *, longest_first: bool = False
) -> str:
	"""Replace every occurrence of each internal name with its public name.

	Matching is a raw substring match without word boundaries. With
	`longest_first`, longer internal names are replaced before the names they
	contain.
	"""
	pairs = list(aliases.items())
	if longest_first:
		pairs.sort(key=lambda pair: len(pair[0]), reverse=True)
	for internal, public in pairs:
		if not internal or internal == public:
			continue
		text = text.replace(internal, public)
	return text


def sanitize_identifiers(text: str, dialect: Dialect = SCALAJS) -> str:
	return text.replace(dialect.sigil, dialect.sigil_replacement)


def downgrade_declarations(text: str, dialect: Dialect = SCALAJS) -> str:
	return dialect.declaration_pattern.sub(dialect.block_scoped_keyword, text)


def rewrite(
	source_text: str,
	map_text: str,
	*,
	dialect: Dialect = SCALAJS,
	longest_first: bool = False,
) -> CompiledScript:
	"""Rewrite compiled Scala.js output for use as a component script body."""
	changed: list[str] = []

	aliases, code = resolve_exports(source_text, dialect)
	if code != source_text:
		changed.append("exports")
	for stage, apply in (
		("renames", lambda text: apply_renames(text, aliases, longest_first=longest_first)),
		("sigils", lambda text: sanitize_identifiers(text, dialect)),
		("declarations", lambda text: downgrade_declarations(text, dialect)),
	):
		rewritten = apply(code)
		if rewritten != code:
			changed.append(stage)
		code = rewritten

	logger.debug(
		"Rewrote Scala.js output: %d export aliases, changed stages: %s",
		len(aliases),
		", ".join(changed) or "none",
	)
	return CompiledScript(code=code, map=map_text, aliases=aliases)


__all__ = [
	"CompiledScript",
	"ExportAliases",
	"apply_renames",
	"downgrade_declarations",
	"resolve_exports",
	"rewrite",
	"sanitize_identifiers",
]
