from xselect.interfaces.cli.cli import start

raise SystemExit(start())
