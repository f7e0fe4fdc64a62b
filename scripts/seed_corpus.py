"""
Corpus generation and loading script for englitune.

Implements deterministic pseudo-random speaker/transcript generation, CSV
emission, and Postgres COPY loading into the `speakers` and `transcripts`
tables defined in `db/init.sql`.
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from pathlib import Path

import typer

from englitune.infrastructure.db_factory import get_sync_connection

app = typer.Typer(help="Generate a synthetic speech corpus and load it into Postgres (CSV + COPY).")

INIT_SQL_PATH = Path(__file__).resolve().parent.parent / "db" / "init.sql"

SPEAKER_HEADER = ["id", "age", "gender", "accent", "region"]
TRANSCRIPT_HEADER = ["speaker_id", "sequence", "transcript"]

_ACCENTS = {
    "English": ["Southern England", "Yorkshire", "Cumbria", "Manchester"],
    "Scottish": ["Edinburgh", "Fife", "Aberdeen"],
    "Irish": ["Dublin", "Cork"],
    "American": ["California", "New York", "Ohio"],
    "Canadian": ["Ontario", "Alberta"],
}
_WORDS = (
    "please call stella ask her to bring these things with her from the store "
    "six spoons of fresh snow peas five thick slabs of blue cheese and maybe "
    "a snack for her brother bob we also need a small plastic snake and a big "
    "toy frog for the kids"
).split()


def _speaker_id(index: int) -> str:
    return f"p{225 + index}"


def _generate_speakers_csv(csv_path: Path, speakers: int, rng: random.Random) -> list[str]:
    ids: list[str] = []
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(SPEAKER_HEADER)
        for i in range(speakers):
            speaker_id = _speaker_id(i)
            accent = rng.choice(sorted(_ACCENTS))
            # Empty CSV field loads as NULL.
            region = rng.choice(_ACCENTS[accent]) if rng.random() > 0.2 else ""
            writer.writerow(
                [speaker_id, rng.randint(18, 38), rng.choice(["F", "M"]), accent, region]
            )
            ids.append(speaker_id)
    return ids


def _generate_transcripts_csv(
    csv_path: Path, speaker_ids: list[str], per_speaker: int, rng: random.Random
) -> int:
    rows = 0
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(TRANSCRIPT_HEADER)
        for speaker_id in speaker_ids:
            for seq in range(1, per_speaker + 1):
                length = rng.randint(4, 12)
                sentence = " ".join(rng.choice(_WORDS) for _ in range(length))
                writer.writerow([speaker_id, f"{seq:03d}", sentence.capitalize() + "."])
                rows += 1
    return rows


def _generate_corpus_csv(
    out_dir: Path, speakers: int, per_speaker: int, seed: int
) -> tuple[Path, Path, int]:
    rng = random.Random(seed)
    speakers_path = out_dir / "speakers.csv"
    transcripts_path = out_dir / "transcripts.csv"
    speaker_ids = _generate_speakers_csv(speakers_path, speakers, rng)
    rows = _generate_transcripts_csv(transcripts_path, speaker_ids, per_speaker, rng)
    return speakers_path, transcripts_path, rows


def _init_schema(dsn: str | None) -> None:
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute(INIT_SQL_PATH.read_text(encoding="utf-8"))
        conn.commit()


def _copy_into_db(dsn: str | None, speakers_path: Path, transcripts_path: Path) -> None:
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            for table, columns, path in (
                ("speakers", SPEAKER_HEADER, speakers_path),
                ("transcripts", TRANSCRIPT_HEADER, transcripts_path),
            ):
                with cur.copy(
                    f"COPY {table} ({', '.join(columns)}) "
                    "FROM STDIN WITH (FORMAT csv, HEADER TRUE)"
                ) as copy:
                    with path.open("r", encoding="utf-8") as f:
                        for line in f:
                            copy.write(line)
        conn.commit()


@app.command()
def main(
    speakers: int = typer.Option(20, "--speakers", "-s", help="Number of speakers to generate."),
    per_speaker: int = typer.Option(
        50,
        "--per-speaker",
        "-n",
        help="Transcripts generated per speaker.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional directory for the CSV files (if omitted, a temp dir will be used).",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    init_schema: bool = typer.Option(
        False,
        "--init-schema",
        help="Create the tables from db/init.sql before loading.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate CSV; skip loading into Postgres.",
    ),
) -> None:
    """
    Generate a synthetic corpus and optionally load it into Postgres using COPY.
    """
    start = time.perf_counter()
    if output:
        out_dir = output
        out_dir.mkdir(parents=True, exist_ok=True)
    else:
        out_dir = Path(tempfile.mkdtemp(prefix="englitune_csv_"))

    typer.echo(f"Generating {speakers} speakers x {per_speaker} transcripts -> {out_dir} (seed={seed})")
    speakers_path, transcripts_path, rows = _generate_corpus_csv(
        out_dir, speakers=speakers, per_speaker=per_speaker, seed=seed
    )
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s ({rows:,} transcripts)")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    if init_schema:
        typer.echo(f"Applying schema from {INIT_SQL_PATH}...")
        _init_schema(dsn)

    load_start = time.perf_counter()
    typer.echo("Loading CSV into Postgres via COPY...")
    _copy_into_db(dsn, speakers_path, transcripts_path)
    typer.echo(
        f"Load completed in {time.perf_counter() - load_start:.2f}s. "
        f"Total time {time.perf_counter() - start:.2f}s."
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
