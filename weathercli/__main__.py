# ABOUTME: Allows running the CLI with `python -m weathercli`.
# ABOUTME: Delegates to the click entry point.

from weathercli.cli import run

run()
