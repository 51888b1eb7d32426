from svala.compiler import CompilerConfig, ScalaJsCompiler
from svala.dialect import SCALAJS, Dialect
from svala.errors import (
	CompilationError,
	CompilerError,
	CompilerNotFoundError,
	DialectError,
	MissingArtifactError,
	SvalaError,
)
from svala.preprocess import (
	PreprocessResult,
	ScalaPreprocessor,
	ScriptBlock,
	find_script_blocks,
	parse_attributes,
	preprocess_component,
)
from svala.rewrite import (
	CompiledScript,
	ExportAliases,
	apply_renames,
	downgrade_declarations,
	resolve_exports,
	rewrite,
	sanitize_identifiers,
)
from svala.version import __version__

__all__ = [
	"SCALAJS",
	"CompilationError",
	"CompiledScript",
	"CompilerConfig",
	"CompilerError",
	"CompilerNotFoundError",
	"Dialect",
	"DialectError",
	"ExportAliases",
	"MissingArtifactError",
	"PreprocessResult",
	"ScalaJsCompiler",
	"ScalaPreprocessor",
	"ScriptBlock",
	"SvalaError",
	"__version__",
	"apply_renames",
	"downgrade_declarations",
	"find_script_blocks",
	"parse_attributes",
	"preprocess_component",
	"resolve_exports",
	"rewrite",
	"sanitize_identifiers",
]
