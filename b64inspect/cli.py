"""Command-line interface for b64inspect."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional

import typer
from rich.console import Console

from . import __version__
from .codec import Base64DecodeError, StreamingBase64Decoder
from .config import Config, ConfigError, DecoderConfig
from .logging_setup import configure_logging
from .utils.env_config import EnvConfigError

logger = logging.getLogger(__name__)

EXIT_DECODE_ERROR = 1
EXIT_READ_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_OPEN_ERROR = 4

app = typer.Typer(
    help="Inspect byte streams, optionally decoding Base64 on the fly.",
    no_args_is_help=True,
)
console = Console(stderr=True)


def build_input(source: BinaryIO, *, base64: bool, config: Optional[DecoderConfig] = None) -> BinaryIO:
    """Return the stream to pull data from, decoding Base64 when requested."""
    if base64:
        return StreamingBase64Decoder(source, config=config)
    return source


def _open_input(file: Optional[str]) -> BinaryIO:
    if file is None or file == "-":
        return typer.get_binary_stream("stdin")
    try:
        return open(file, "rb")
    except OSError as exc:
        console.print(f"Unable to open {file}\n{exc}", markup=False, highlight=False)
        raise typer.Exit(code=EXIT_OPEN_ERROR) from exc


def _open_output(output: Optional[Path]) -> BinaryIO:
    if output is None:
        return typer.get_binary_stream("stdout")
    try:
        return output.open("wb")
    except OSError as exc:
        console.print(f"Unable to open {output}\n{exc}", markup=False, highlight=False)
        raise typer.Exit(code=EXIT_OPEN_ERROR) from exc


def pump(stream: BinaryIO, sink: BinaryIO, *, chunk_size: int, text: bool = False) -> int:
    """Pull ``stream`` in ``chunk_size`` reads until exhausted, writing each chunk to ``sink``."""
    buffer = bytearray(chunk_size)
    total = 0
    with memoryview(buffer) as view:
        while True:
            count = stream.readinto(buffer)
            if count is None:
                # Non-blocking source with nothing available yet.
                continue
            if count == 0:
                break
            chunk = view[:count]
            if text:
                sink.write(bytes(chunk).decode("utf-8", errors="replace").encode("utf-8") + b"\n")
            else:
                sink.write(chunk)
            total += count
    sink.flush()
    return total


@app.command()
def decode(
    file: Optional[str] = typer.Argument(
        None,
        help="Where to read data from. Defaults to standard input; '-' also means standard input.",
    ),
    base64: bool = typer.Option(
        False,
        "--base64",
        "-b",
        help="Decode the input as base64 before passing it on.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        writable=True,
        help="Write output to this file instead of standard output.",
    ),
    text: Optional[bool] = typer.Option(
        None,
        "--text/--raw",
        help="Print each chunk as UTF-8 on its own line instead of writing raw bytes.",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk-size",
        min=1,
        help="Bytes requested per read from the (decoded) input.",
    ),
    config_paths: List[Path] = typer.Option(
        [],
        "--config",
        "-c",
        help="YAML configuration file. Repeat to merge several, later files win.",
    ),
    dotenv_path: Optional[Path] = typer.Option(
        None,
        "--dotenv-path",
        help="Optional .env file with B64I_* overrides.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """
    Copy FILE (or standard input) to the output, decoding Base64 with --base64.

    Non-alphabet bytes such as line breaks are ignored while decoding.
    """
    try:
        config = Config.load(config_paths, dotenv_path=str(dotenv_path) if dotenv_path else None)
        if log_level is not None:
            config.system.log_level = log_level
        if chunk_size is not None:
            config.output.chunk_size = chunk_size
        if text is not None:
            config.output.mode = "text" if text else "raw"
        config.validate()
    except (ConfigError, EnvConfigError) as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    configure_logging(config.system.log_level)

    source = _open_input(file)
    sink = _open_output(output)
    stream = build_input(source, base64=base64, config=config.decoder)
    logger.debug(
        "decode_start file=%s base64=%s chunk_size=%s mode=%s",
        file or "-",
        base64,
        config.output.chunk_size,
        config.output.mode,
    )

    try:
        total = pump(stream, sink, chunk_size=config.output.chunk_size, text=config.output.mode == "text")
    except Base64DecodeError as exc:
        console.print(f"[bold red]Failed to read input:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_DECODE_ERROR) from exc
    except BrokenPipeError:
        raise typer.Exit(code=0)
    except OSError as exc:
        console.print(f"Failed to read input.\n{exc}", markup=False, highlight=False)
        raise typer.Exit(code=EXIT_READ_ERROR) from exc
    finally:
        if output is not None:
            sink.close()
        if file not in (None, "-"):
            stream.close()

    logger.info("decode_complete bytes=%s", total)


@app.command()
def version() -> None:
    """Print the b64inspect version."""
    typer.echo(__version__)


def main() -> None:  # pragma: no cover - entrypoint wrapper
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
