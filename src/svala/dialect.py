"""
Conventions of the Scala.js output that the rewrite relies on.

Every assumption about the generated JavaScript lives here so a toolchain
upgrade that changes the output shape only needs a new `Dialect`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from svala.errors import DialectError

_IDENTIFIER_START_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_KEYWORD_RE = re.compile(r"[a-z]+\Z")


@dataclass(frozen=True)
class Dialect:
	"""
	Output conventions of one Scala.js toolchain version.

	Attributes:
	    export_pattern (re.Pattern[str]): Matches one `export { ... };` statement,
	        group 1 is the alias list.
	    alias_separator (re.Pattern[str]): Splits `internal as public` entries.
	    sigil (str): Identifier prefix character emitted by the compiler.
	    sigil_replacement (str): Identifier-safe text substituted for the sigil.
	    function_scoped_keyword (str): Declaration keyword to downgrade.
	    block_scoped_keyword (str): Declaration keyword to downgrade to.
	"""

	export_pattern: re.Pattern[str] = field(
		default_factory=lambda: re.compile(r"export\s+\{([^}]*)\}\s*;")
	)
	alias_separator: re.Pattern[str] = field(
		default_factory=lambda: re.compile(r"\s+as\s+")
	)
	sigil: str = "$"
	sigil_replacement: str = "scala_"
	function_scoped_keyword: str = "var"
	block_scoped_keyword: str = "let"

	def __post_init__(self) -> None:
		if len(self.sigil) != 1:
			raise DialectError(f"Sigil must be a single character, got {self.sigil!r}")
		if not _IDENTIFIER_START_RE.match(self.sigil_replacement):
			raise DialectError(
				f"Sigil replacement {self.sigil_replacement!r} is not a valid identifier start"
			)
		for keyword in (self.function_scoped_keyword, self.block_scoped_keyword):
			if not _KEYWORD_RE.match(keyword):
				raise DialectError(f"Not a declaration keyword: {keyword!r}")
		if self.export_pattern.groups < 1:
			raise DialectError("Export pattern must capture the alias list")

	@property
	def declaration_pattern(self) -> re.Pattern[str]:
		return re.compile(rf"\b{re.escape(self.function_scoped_keyword)}\b")


SCALAJS = Dialect()
"""Output conventions of Scala.js `fastOptJS` for Scala 3."""


__all__ = ["SCALAJS", "Dialect"]
