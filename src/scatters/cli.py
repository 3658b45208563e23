from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .config import ConfigError, ScattersConfig, load_config
from .ingestion import IngestionError
from .models import Placement
from .pipeline import CorpusBuild, EmptyVocabularyError, build_generator, load_corpus
from .session import ScatterSession

app = typer.Typer(help="Cut-up poetry scatters from text files.", no_args_is_help=True)


class PlacementPayload(TypedDict):
    word: str
    x: int
    y: int
    source: str | None
    forced: bool


class VocabularyEntryPayload(TypedDict):
    word: str
    source: str | None


@app.command()
def scatter(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    width: int | None = typer.Option(None, "--width", help="Canvas width in cells."),
    height: int | None = typer.Option(None, "--height", help="Canvas height in cells."),
    density: float | None = typer.Option(
        None, "--density", "-d", help="Words per area multiplier (0.1 - 6.0)."
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible scatters."),
    rerolls: int = typer.Option(
        0, "--rerolls", min=0, help="Extra scatters to generate after the first."
    ),
    recursive: bool | None = typer.Option(
        None, "--recursive/--no-recursive", help="Descend into subdirectories."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit placements as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress."),
) -> None:
    """Scatter words from the input corpus across a character grid."""
    _configure_logging(verbose)
    cfg = load_config(config)
    _apply_overrides(cfg, width, height, density, recursive)
    build = _load_corpus_or_exit(input_path, cfg, quiet=as_json)

    session = ScatterSession(
        build_generator(build, cfg),
        density=cfg.density,
        min_density=cfg.min_density,
        max_density=cfg.max_density,
    )
    rng = random.Random(seed)
    scatters: List[List[Placement]] = []
    for _ in range(rerolls + 1):
        scatters.append(session.reroll(cfg.canvas_width, cfg.canvas_height, rng))

    if as_json:
        payload = {
            "parsed_files": build.parsed_count,
            "failures": [str(failure) for failure in build.failures],
            "vocabulary_size": build.word_bank.size(),
            "canvas": {"width": cfg.canvas_width, "height": cfg.canvas_height},
            "density": session.density,
            "scatters": [[_placement_dict(p) for p in placements] for placements in scatters],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    for idx, placements in enumerate(scatters):
        if idx:
            typer.echo("-" * max(cfg.canvas_width, 1))
        typer.echo(render_grid(placements, cfg.canvas_width, cfg.canvas_height))
        typer.echo(f"words {len(placements)} / {build.word_bank.size()}", err=True)


@app.command()
def vocab(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    recursive: bool | None = typer.Option(
        None, "--recursive/--no-recursive", help="Descend into subdirectories."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the vocabulary as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress."),
) -> None:
    """List the filtered vocabulary collected from the input corpus."""
    _configure_logging(verbose)
    cfg = load_config(config)
    _apply_overrides(cfg, None, None, None, recursive)
    build = _load_corpus_or_exit(input_path, cfg, quiet=as_json)
    bank = build.word_bank
    words = sorted(bank.finalize())

    if as_json:
        entries: List[VocabularyEntryPayload] = [
            {"word": word, "source": bank.source_of(word)} for word in words
        ]
        typer.echo(json.dumps({"vocabulary_size": bank.size(), "words": entries}, indent=2))
        return
    for word in words:
        typer.echo(word)


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ScattersConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def render_grid(placements: List[Placement], width: int, height: int) -> str:
    """Draw placements onto a blank width x height grid; later words overwrite earlier ones."""
    width, height = max(width, 0), max(height, 0)
    rows = [[" "] * width for _ in range(height)]
    for placement in placements:
        if not 0 <= placement.y < height:
            continue
        row = rows[placement.y]
        for offset, ch in enumerate(placement.word):
            col = placement.x + offset
            if 0 <= col < width:
                row[col] = ch
    return "\n".join("".join(row).rstrip() for row in rows)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _apply_overrides(
    config: ScattersConfig,
    width: int | None,
    height: int | None,
    density: float | None,
    recursive: bool | None,
) -> None:
    """Apply CLI overrides to config fields when provided."""
    if width is not None:
        config.canvas_width = width
    if height is not None:
        config.canvas_height = height
    if density is not None:
        config.density = density
    if recursive is not None:
        config.recursive = recursive


def _load_corpus_or_exit(input_path: Path, config: ScattersConfig, quiet: bool) -> CorpusBuild:
    """Build the vocabulary, translating pipeline errors into CLI exits."""
    try:
        build = load_corpus(input_path, config)
    except IngestionError as exc:
        # Single-file mode: a broken document is fatal.
        raise typer.BadParameter(str(exc), param_hint="--input-path") from exc
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    except EmptyVocabularyError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not quiet:
        for failure in build.failures:
            typer.echo(f"Warning: {failure}", err=True)
        typer.echo(f"Parsed {build.parsed_count} files", err=True)
        typer.echo(f"Collected {build.word_bank.size()} unique words", err=True)
    return build


def _placement_dict(placement: Placement) -> PlacementPayload:
    return {
        "word": placement.word,
        "x": placement.x,
        "y": placement.y,
        "source": placement.source,
        "forced": placement.forced,
    }


if __name__ == "__main__":
    main()
