from .cli import cli as cli, main as main
