"""
Log viewer route
Auto-refreshing HTML page over the in-memory log buffer
"""

import os
import re

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from membership_service.utils.dependencies import get_log_buffer
from membership_service.utils.logger import LogBuffer

router = APIRouter()

REFRESH_SECONDS = 2
_LEVEL_PATTERN = re.compile(r"\[(DEBUG|INFO|WARNING|ERROR|CRITICAL)\]")

jinja_env = Environment(
    loader=FileSystemLoader(os.path.join(os.path.dirname(__file__), "..", "templates")),
    autoescape=select_autoescape(['html', 'xml']),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _level_of(line: str) -> str:
    match = _LEVEL_PATTERN.search(line)
    if not match:
        return "INFO"
    # Styling only distinguishes errors from warnings from the rest
    level = match.group(1)
    return "ERROR" if level == "CRITICAL" else level


@router.get("/logs", response_class=HTMLResponse, include_in_schema=False)
async def view_logs(buffer: LogBuffer = Depends(get_log_buffer)):
    """Recent log lines, newest first"""
    entries = [{"line": line, "level": _level_of(line)} for line in buffer.entries()]
    template = jinja_env.get_template("logs.html")
    return HTMLResponse(template.render(entries=entries, refresh_seconds=REFRESH_SECONDS))
