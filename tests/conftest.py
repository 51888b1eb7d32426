import sys
import textwrap
from pathlib import Path

import pytest
from svala.compiler import CompilerConfig
from svala.env import (
	ENV_SVALA_COMPILE_COMMAND,
	ENV_SVALA_OUTPUT_JS,
	ENV_SVALA_OUTPUT_MAP,
	ENV_SVALA_PROJECT_DIR,
	ENV_SVALA_SOURCE_DIR,
)

# Stand-in for `sbt fastOptJS`: emits Scala.js-shaped output that embeds the
# first line of the source, fails on request, or skips writing artifacts.
FAKE_COMPILER = textwrap.dedent(
	"""
	import json
	import sys
	from pathlib import Path

	source = Path(sys.argv[1]).read_text()
	out = Path(sys.argv[2])
	if "fail" in source:
	    print("[error] Script.scala: not found: value boom")
	    sys.exit(3)
	if "nooutput" in source:
	    sys.exit(0)
	first = source.strip().splitlines()[0] if source.strip() else ""
	out.parent.mkdir(parents=True, exist_ok=True)
	out.write_text(
	    "var $c_content = " + json.dumps(first) + ";\\n"
	    "var $m_Main = function() { var x = 1; return x; };\\n"
	    "export { $c_content as content, $m_Main as Main };\\n"
	)
	Path(str(out) + ".map").write_text('{"version":3,"sources":["Script.scala"]}')
	"""
)


@pytest.fixture(autouse=True)
def _clear_svala_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	for name in (
		ENV_SVALA_PROJECT_DIR,
		ENV_SVALA_COMPILE_COMMAND,
		ENV_SVALA_SOURCE_DIR,
		ENV_SVALA_OUTPUT_JS,
		ENV_SVALA_OUTPUT_MAP,
	):
		monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_compiler_script(tmp_path: Path) -> Path:
	script = tmp_path / "fake_scalajs.py"
	script.write_text(FAKE_COMPILER)
	return script


@pytest.fixture
def fake_compiler_config(tmp_path: Path, fake_compiler_script: Path) -> CompilerConfig:
	project = tmp_path / "project"
	project.mkdir()
	return CompilerConfig(
		project_dir=project,
		command=[sys.executable, str(fake_compiler_script), "{source}", "out/main.js"],
		output_js="out/main.js",
	)
