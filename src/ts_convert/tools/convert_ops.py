"""MCP tools for timestamp conversion and timezone lookup."""

from typing import Annotated, Any

from fastmcp import Context
from pydantic import Field

from ts_convert.convert import convert
from ts_convert.errors import TimestampError
from ts_convert.server import mcp
from ts_convert.timezone import list_timezones as known_timezone_names
from ts_convert.timezone import normalize_name, resolve_timezone as resolve_name

_TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}


def _default_tz(ctx: Context) -> str:
    lc: dict[str, Any] = ctx.request_context.lifespan_context
    return lc["tz"]


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def convert_timestamp(
    ctx: Context,
    value: Annotated[
        str | None,
        Field(
            description=(
                "Unix timestamp, ISO timestamp, relative time like '+3days', "
                "or 'yyyy-MM-dd h:mma'. Omit for the current time."
            )
        ),
    ] = None,
    timezone: Annotated[
        str | None,
        Field(description="Timezone name, city, country or abbreviation"),
    ] = None,
) -> str:
    """Convert a timestamp into Unix, ISO, local and relative forms."""
    try:
        result = convert(value, timezone or _default_tz(ctx))
    except TimestampError as e:
        return f"Error: {e}"

    fmt = result.input_format.value if result.input_format else "current time"
    return (
        f"# {value or 'Now'}\n\n"
        f"- **Format:** {fmt}\n"
        f"- **Timezone:** {result.timezone}\n"
        f"- **Local time:** {result.local_time}\n"
        f"- **Unix (s):** {result.unix_seconds}\n"
        f"- **Unix (ms):** {result.unix_milliseconds}\n"
        f"- **UTC ISO:** {result.utc_iso}\n"
        f"- **Relative:** {result.relative}"
    )


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def resolve_timezone(
    name: Annotated[str, Field(description="Loose timezone name to resolve")],
) -> str:
    """Resolve a city, country, abbreviation or fragment to an IANA timezone."""
    try:
        return resolve_name(name)
    except TimestampError as e:
        return f"Error: {e}"


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def list_timezones(
    query: Annotated[
        str | None, Field(description="Only list identifiers containing this text")
    ] = None,
) -> str:
    """List known IANA timezone identifiers."""
    names = known_timezone_names()
    if query:
        needle = normalize_name(query)
        names = [name for name in names if needle in normalize_name(name)]
    if not names:
        return f"No timezones found matching '{query}'"
    return "\n".join(names)
