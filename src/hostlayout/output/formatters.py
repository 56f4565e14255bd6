"""Human and JSON renderings of a ServiceResult."""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.markup import escape

from hostlayout.output.console import create_console, get_output

if TYPE_CHECKING:
    from hostlayout.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output switches derived from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode dumps the whole result. Human mode prints ``OK: op`` with
    indented data (omitted when quiet), or ``ERROR: op - message``.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[hl.error]ERROR:[/] [hl.op]{result.op}[/] - {escape(message)}")
        if settings.verbose and result.error and result.error.detail:
            for key, value in result.error.detail.items():
                console.print(f"  [hl.key]{key}:[/] {escape(_format_value(value))}")
        return get_output(console).rstrip("\n")

    console.print(f"[hl.ok]OK:[/] [hl.op]{result.op}[/]")
    if not settings.quiet:
        for key, value in result.data.items():
            console.print(f"  [hl.key]{key}:[/] {escape(_format_value(value))}")
    return get_output(console).rstrip("\n")
