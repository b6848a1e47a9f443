from __future__ import annotations

import json
import random
from pathlib import Path

import typer

from bytefreq.util.logging import configure_logging, get_logger
from bytefreq.util.seed import make_rng

app = typer.Typer(add_completion=False)

NAMES = ["Alice", "Bob", "Cara", "Dion", "Eve", "Fay", "Zoë", "Łukasz"]
CITIES = ["Paris", "Berlin", "Oslo", "Lima", "Riga", "Pune", "São Paulo"]
DOMAINS = ["example.com", "mail.test", "corp.example.org"]


def _record(idx: int, rng: random.Random) -> dict:
    name = rng.choice(NAMES)
    return {
        "id": idx,
        "name": name,
        "email": f"{name.lower()}{rng.randint(1, 999)}@{rng.choice(DOMAINS)}",
        "phone": f"+44 {rng.randint(1000, 9999)} {rng.randint(100000, 999999)}",
        "city": rng.choice(CITIES),
        "joined": f"{rng.randint(2015, 2024)}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
    }


def tabular_lines(n: int, rng: random.Random, delimiter: str = "|", ragged_rate: float = 0.05) -> list[str]:
    rows = [_record(i, rng) for i in range(n)]
    header = delimiter.join(rows[0].keys()) if rows else ""
    lines = [header]
    for row in rows:
        fields = [str(v) for v in row.values()]
        roll = rng.random()
        if roll < ragged_rate:
            fields.append("overflow")
        elif roll < 2 * ragged_rate:
            fields = fields[:-1]
        lines.append(delimiter.join(fields))
    return lines


def json_lines(n: int, rng: random.Random, malformed_rate: float = 0.02) -> list[str]:
    lines = []
    for i in range(n):
        rec = _record(i, rng)
        doc = {
            "id": rec["id"],
            "person": {"name": rec["name"], "contact": {"email": rec["email"], "phone": rec["phone"]}},
            "city": rec["city"],
            "tags": rng.sample(["new", "vip", "churned", "trial"], k=rng.randint(0, 3)),
            "active": rng.random() < 0.7,
            "score": None if rng.random() < 0.1 else round(rng.uniform(0, 100), 2),
        }
        text = json.dumps(doc, ensure_ascii=False)
        if rng.random() < malformed_rate:
            text = text[: len(text) // 2]
        lines.append(text)
    return lines


@app.command()
def main(
    n: int = typer.Option(100, "--n"),
    fmt: str = typer.Option("tabular", "--format"),
    delimiter: str = typer.Option("|", "--delimiter"),
    seed: int = typer.Option(123, "--seed"),
    out: str = typer.Option("out/sample.txt", "--out"),
) -> None:
    configure_logging()
    logger = get_logger(__name__)
    logger.info("sample_gen format=%s n=%d seed=%d out=%s", fmt, n, seed, out)
    rng = make_rng(seed)
    if fmt == "json":
        lines = json_lines(n, rng)
    elif fmt == "tabular":
        lines = tabular_lines(n, rng, delimiter=delimiter)
    else:
        logger.error("sample_gen unknown format=%s", fmt)
        raise SystemExit(1)
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("sample_gen complete format=%s rows=%d", fmt, len(lines))


if __name__ == "__main__":
    app()
