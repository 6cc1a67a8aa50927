"""Allow running tidyfs as ``python -m tidyfs``."""

from tidyfs.cli.main import app

app()
