from __future__ import annotations


class SvalaError(RuntimeError):
	"""Base error for Scala.js script block processing."""


class DialectError(SvalaError, ValueError):
	"""Raised when a dialect contract would produce invalid JavaScript."""


class CompilerError(SvalaError):
	"""Base error for failures of the external Scala.js toolchain."""


class CompilerNotFoundError(CompilerError):
	"""Raised when the compiler executable cannot be started."""


class CompilationError(CompilerError):
	"""Raised when the compiler exits with a non-zero status."""

	returncode: int
	output: str

	def __init__(self, returncode: int, output: str) -> None:
		self.returncode = returncode
		self.output = output
		msg = f"Scala.js compilation failed with exit code {returncode}"
		if output.strip():
			msg += f":\n{output.rstrip()}"
		super().__init__(msg)


class MissingArtifactError(CompilerError):
	"""Raised when the compiler finished but an expected output file is absent."""


__all__ = [
	"CompilationError",
	"CompilerError",
	"CompilerNotFoundError",
	"DialectError",
	"MissingArtifactError",
	"SvalaError",
]
