"""Text rendering of the view state with Jinja2 templates."""

from datetime import datetime
from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined

from . import __version__
from .models import ViewState

_environment = Environment(
    loader=PackageLoader("status_client", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
    undefined=StrictUndefined,
)


def format_uptime(seconds: Optional[float]) -> str:
    """Render seconds as e.g. ``1h 2m 3s``."""
    if seconds is None:
        return "n/a"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_megabytes(value: Optional[int]) -> str:
    """Render a byte count in MB with one decimal."""
    if value is None:
        return "n/a"
    return f"{value / (1024 * 1024):.1f} MB"


def format_local_datetime(timestamp_ms: Optional[int]) -> str:
    """Render epoch milliseconds in the local timezone."""
    if timestamp_ms is None:
        return "n/a"
    return datetime.fromtimestamp(timestamp_ms / 1000).astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")


_environment.filters["uptime"] = format_uptime
_environment.filters["megabytes"] = format_megabytes
_environment.filters["local_datetime"] = format_local_datetime


def template_for(state: ViewState) -> str:
    """
    Pick the template for a state.

    Loading wins even over stale data, then an error, then the placeholder
    for a view that has never received a report.
    """
    if state.loading:
        return "loading.txt.j2"
    if state.error:
        return "error.txt.j2"
    if state.report is None:
        return "unavailable.txt.j2"
    return "report.txt.j2"


def render_view(state: ViewState) -> str:
    """Render the state as display text."""
    template = _environment.get_template(template_for(state))
    return template.render(state=state, report=state.report, client_version=__version__)
