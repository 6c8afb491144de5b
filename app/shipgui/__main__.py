"""Allow ``python -m shipgui``."""

from shipgui.cli.main import app

app()
