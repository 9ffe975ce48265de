"""``ts`` command: convert timestamps from the terminal."""

import json
import logging
import re
import sys
from itertools import islice
from typing import Any, NoReturn

import click

from .config import Config
from .convert import convert, list_all_timezones
from .errors import TimestampError
from .types import ConversionResult

logger = logging.getLogger(__name__)

# "-2hours" or "-2 hours" would otherwise be scanned as short options
_NEGATIVE_RELATIVE = re.compile(r"^-\d")

_TABLE_ROWS = (
    ("Timezone", "timezone"),
    ("Local time", "local_time"),
    ("Unix (s)", "unix_seconds"),
    ("Unix (ms)", "unix_milliseconds"),
    ("UTC ISO", "utc_iso"),
    ("Relative", "relative"),
)


class _TimestampCommand(click.Command):
    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if "--" in args or not any(_NEGATIVE_RELATIVE.match(arg) for arg in args):
            return super().parse_args(ctx, args)

        # Options first, then every positional word in its original order
        takes_value = {
            opt
            for param in self.params
            if isinstance(param, click.Option) and not param.is_flag
            for opt in param.opts
        }
        options: list[str] = []
        words: list[str] = []
        remaining = iter(args)
        for arg in remaining:
            if arg in takes_value:
                options.append(arg)
                options.extend(islice(remaining, 1))
            elif arg.startswith("-") and not _NEGATIVE_RELATIVE.match(arg):
                options.append(arg)
            else:
                words.append(arg)
        return super().parse_args(ctx, [*options, "--", *words])


def render_table(result: ConversionResult) -> str:
    """Aligned two-column table of a conversion result."""
    width = max(len(label) for label, _ in _TABLE_ROWS)
    return "\n".join(
        f"{label:<{width}}  {getattr(result, field)}" for label, field in _TABLE_ROWS
    )


def render_json(payload: Any) -> str:
    if isinstance(payload, ConversionResult):
        payload = payload.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, indent=2)


def _fail(message: str, output_format: str) -> NoReturn:
    if output_format == "json":
        click.echo(render_json({"error": message}))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(
    cls=_TimestampCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("value", nargs=-1, metavar="[INPUT]")
@click.option("-z", "--timezone", "tz_name", help="Timezone name, city, country or abbreviation.")
@click.option(
    "-o",
    "--output",
    "output_format",
    type=click.Choice(["table", "json"]),
    help="Output format (default: table, or TS_OUTPUT_FORMAT).",
)
@click.option(
    "--list-timezones",
    is_flag=True,
    help="List every known timezone identifier and alias, then exit.",
)
def main(
    value: tuple[str, ...],
    tz_name: str | None,
    output_format: str | None,
    list_timezones: bool,
) -> None:
    """Convert INPUT between Unix, ISO and human-readable forms.

    INPUT may be a Unix timestamp (seconds or milliseconds), an ISO
    timestamp, a relative time like "+3days", or "yyyy-MM-dd h:mma".
    Without INPUT the current time is shown.
    """
    config = Config()
    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    output_format = output_format or config.output_format

    if list_timezones:
        listing = list_all_timezones()
        if output_format == "json":
            click.echo(render_json(listing))
        else:
            click.echo("\n".join(listing["timezones"]))
            click.echo("\nAliases:")
            click.echo("\n".join(listing["aliases"]))
        return

    text = " ".join(value) or None
    try:
        result = convert(text, tz_name or config.timezone)
    except TimestampError as e:
        logger.debug("Conversion of %r failed", text, exc_info=True)
        _fail(str(e), output_format)

    if output_format == "json":
        click.echo(render_json(result))
    else:
        click.echo(render_table(result))


if __name__ == "__main__":  # pragma: no cover
    main()
