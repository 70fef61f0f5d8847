"""Minimal HTML dashboard listing the registered queues."""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from queueboard_api.config import Settings
from queueboard_api.dependencies import get_discovery_service, get_queue_registry, get_settings
from queueboard_api.domain.models import DiscoveryFailed, DiscoveryResult, QueueSummary
from queueboard_api.security import require_operator
from queueboard_api.services.discovery import DiscoveryService
from queueboard_api.services.queue_registry import QueueRegistry
from queueboard_api.services.queue_summary import summarize_all

router = APIRouter(tags=["dashboard"], dependencies=[Depends(require_operator)])

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Queues</title>
<style>
body {{ font-family: -apple-system, "Segoe UI", Roboto, Arial, sans-serif; margin: 2rem; }}
table {{ border-collapse: collapse; }}
th, td {{ padding: 6px 12px; border-bottom: 1px solid #ddd; text-align: left; }}
.error {{ color: #b00020; }}
</style>
</head>
<body>
<header><h1>Queues</h1></header>
{content}
</body>
</html>
"""


def _render_row(summary: QueueSummary) -> str:
    if summary.counts is None:
        counts = f'<span class="error">{escape(summary.error or "unavailable")}</span>'
    else:
        counts = ", ".join(
            f"{escape(state)}: {count}" for state, count in sorted(summary.counts.items())
        )
    return (
        f"<tr><td>{escape(summary.name)}</td>"
        f"<td>{escape(summary.engine.value)}</td>"
        f"<td>{counts}</td></tr>"
    )


def render_dashboard(
    summaries: list[QueueSummary],
    *,
    populated: bool,
    discovery_result: DiscoveryResult | None = None,
) -> str:
    banner = ""
    if isinstance(discovery_result, DiscoveryFailed):
        banner = (
            f'<p class="error">Queue discovery failed: {escape(discovery_result.reason)}</p>\n'
        )

    if not populated:
        content = banner or "<p>Fetching queue list, please wait...</p>"
    elif not summaries:
        content = banner + "<p>No queues found.</p>"
    else:
        rows = "\n".join(_render_row(summary) for summary in summaries)
        content = banner + (
            "<table><thead><tr><th>Queue</th><th>Engine</th><th>Jobs</th></tr></thead>"
            f"<tbody>\n{rows}\n</tbody></table>"
        )
    return _PAGE.format(content=content)


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    registry: QueueRegistry = Depends(get_queue_registry),
    discovery: DiscoveryService = Depends(get_discovery_service),
    app_settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Dashboard root document."""
    summaries = await summarize_all(
        registry.current(), max_concurrency=app_settings.counts_max_concurrency
    )
    return HTMLResponse(
        render_dashboard(
            summaries,
            populated=registry.populated,
            discovery_result=discovery.last_result,
        )
    )
