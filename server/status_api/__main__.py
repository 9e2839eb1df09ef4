"""Allow ``python -m status_api``."""

from .main import run

run()
