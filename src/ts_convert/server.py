"""ts-convert MCP server (FastMCP v2)."""

from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .config import Config
from .timezone import detect_local_timezone, resolve_timezone

# ---------------------------------------------------------------------------
# Lifespan: load settings and settle the default timezone once
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP):
    config = Config()
    # A bad TS_TIMEZONE fails at startup rather than on every call
    tz = resolve_timezone(config.timezone) if config.timezone else detect_local_timezone()
    yield {
        "config": config,
        "tz": tz,
    }


# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

mcp = FastMCP("ts-convert", lifespan=lifespan)

# Importing tool modules triggers @mcp.tool() registration
from ts_convert.tools import convert_ops  # noqa: E402, F401

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    mcp.run()
