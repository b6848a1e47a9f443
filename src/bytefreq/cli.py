from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

import typer

from bytefreq.config import load_config, resolve_config
from bytefreq.parse.lines import iter_lines, iter_text_chunks
from bytefreq.profile.profiler import Profiler
from bytefreq.report.charprof import CharacterProfile
from bytefreq.report.dq import build_report, render_text, report_to_dict
from bytefreq.util.logging import configure_logging, get_logger

app = typer.Typer(add_completion=False, help="Pattern-frequency data profiler for delimited and JSON lines input.")


@contextmanager
def open_input(path: str) -> Iterator[BinaryIO]:
    if path == "-":
        yield sys.stdin.buffer
        return
    with open(path, "rb") as f:
        yield f


@app.command()
def main(
    input_path: str = typer.Argument("-", help="Input file, '-' for stdin."),
    grain: Optional[str] = typer.Option(
        None,
        "--grain",
        "-g",
        help="Mask grain: H (ASCII classes), L (H, runs compressed), U (unicode classes), LU (U, runs compressed).",
    ),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Tabular field separator (default '|')."),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Input format: tabular or json."),
    report: Optional[str] = typer.Option(None, "--report", "-r", help="DQ (data quality) or CP (character profile)."),
    pathdepth: Optional[int] = typer.Option(None, "--pathdepth", "-p", help="JSON object nesting depth bound."),
    remove_array_numbers: Optional[bool] = typer.Option(
        None,
        "--remove-array-numbers/--keep-array-numbers",
        "-a",
        help="Name JSON array elements path[] instead of path[i].",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for example sampling."),
    config: str = typer.Option("", "--config", help="YAML file with default options."),
    out: str = typer.Option("", "--out", help="Also write the DQ report as JSON to this path."),
    log_every: int = typer.Option(0, "--log-every", help="Log progress every N rows (0 disables)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR (default INFO)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    configure_logging(verbose=verbose)
    logger = get_logger(__name__)
    try:
        cfg = load_config(config) if config else {}
        profile_cfg = resolve_config(
            {
                "grain": grain,
                "delimiter": delimiter,
                "format": fmt,
                "report": report,
                "pathdepth": pathdepth,
                "remove_array_numbers": remove_array_numbers,
                "seed": seed,
                "log_level": log_level,
            },
            cfg,
        )
    except (OSError, ValueError) as exc:
        logger.error("bytefreq invalid configuration: %s", exc)
        raise SystemExit(1)
    configure_logging(profile_cfg.log_level, verbose=verbose)
    logger.info(
        "bytefreq input=%s report=%s format=%s grain=%s delimiter=%r pathdepth=%d remove_array_numbers=%s",
        input_path,
        profile_cfg.report,
        profile_cfg.format,
        profile_cfg.grain.value,
        profile_cfg.delimiter,
        profile_cfg.pathdepth,
        str(profile_cfg.remove_array_numbers).lower(),
    )

    if profile_cfg.report == "CP":
        with open_input(input_path) as stream:
            chars = CharacterProfile().run(iter_text_chunks(stream))
        print(chars.render_text(), end="")
        logger.info("character profile complete distinct_chars=%d", len(chars.counts))
        return

    with open_input(input_path) as stream:
        profiler = Profiler(profile_cfg).run(iter_lines(stream), log_every=log_every)
    result = build_report(profiler)
    print(render_text(result), end="")
    if out:
        out_file = Path(out)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(report_to_dict(result), indent=2, sort_keys=True, ensure_ascii=False)
        out_file.write_text(payload, encoding="utf-8")
        logger.info("bytefreq json report out=%s", out)


if __name__ == "__main__":
    app()
