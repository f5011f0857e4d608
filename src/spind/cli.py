import asyncio
import time
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from spind.core.config import DecodeFileConfig
from spind.core.use_cases.process import ProcessStats
from spind.decoding.registry import registered_decoders
from spind.ingest import InputError
from spind.log import configure_logging
from spind.orchestration.files import decode_file
from spind.orchestration.processor import default_registry

console = Console(stderr=True)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Override LOG_FORMAT",
)
def cli(log_level: str | None, log_format: str | None) -> None:
    """spind: decode Solana program instructions into function/property records."""
    configure_logging(level=log_level, fmt=log_format)


@cli.command("decode")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "output_dir", required=True, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--encoding",
    type=click.Choice(["base58", "base64", "hex"]),
    default="base58",
    show_default=True,
    help="Encoding of the `data` fields",
)
@click.option(
    "--siblings",
    "siblings_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSONL of compiled instructions per transaction (signature-verification programs)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["jsonl", "parquet"]),
    default="jsonl",
    show_default=True,
)
@click.option("--concurrency", type=click.IntRange(min=1), default=16, show_default=True, help="Max parallel decodes")
def decode_cmd(
    input_path: Path,
    output_dir: Path,
    encoding: str,
    siblings_path: Path | None,
    output_format: str,
    concurrency: int,
) -> None:
    """Decode a JSONL file of raw instructions, one batch per transaction."""
    config = DecodeFileConfig(
        input_path=input_path,
        output_dir=output_dir,
        data_encoding=encoding,  # type: ignore[arg-type]
        siblings_path=siblings_path,
        output_format=output_format,  # type: ignore[arg-type]
        concurrency=concurrency,
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]decoding[/]"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    t0 = time.time()
    try:
        with progress:
            task = progress.add_task("transactions", total=None)

            def on_batch(tx_hash: str, stats: ProcessStats) -> None:
                progress.advance(task, 1)

            output = asyncio.run(decode_file(config, on_batch=on_batch))
    except InputError as e:
        raise click.ClickException(str(e)) from e

    elapsed = time.time() - t0
    s = output.stats
    console.print(f"[bold]done[/]: {output.transactions} transactions • {elapsed:.2f}s")
    console.print(
        f"[bold]summary[/]: "
        f"[green]decoded[/]={s.decoded}  "
        f"[yellow]unsupported[/]={s.unsupported}  "
        f"[red]failed[/]={s.failed}  "
        f"(instructions={s.submitted})"
    )
    for path in output.written:
        console.print(f"  wrote {path}")


@cli.command("programs")
def programs_cmd() -> None:
    """List the registered decoders and the program ids they claim."""
    table = Table(title="registered decoders")
    table.add_column("decoder", style="bold")
    table.add_column("program ids")
    table.add_column("needs siblings")
    for d in registered_decoders(default_registry()):
        table.add_row(d.name, "\n".join(d.program_ids), "yes" if d.requires_siblings else "")
    Console().print(table)


if __name__ == "__main__":
    cli()
