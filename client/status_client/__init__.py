"""Merge guard status client: polls the status API and renders its health report."""

__version__ = "0.1.0"

# Imported after __version__, which the view module reads
from .models import HealthSnapshot, ViewState  # noqa: E402
from .poller import StatusPoller  # noqa: E402
from .view import render_view  # noqa: E402

__all__ = [
    "HealthSnapshot",
    "StatusPoller",
    "ViewState",
    "render_view",
]
