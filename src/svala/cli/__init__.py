from svala.cli.cmd import cli, main

__all__ = ["cli", "main"]
