"""CLI command for identifying a plant photo and re-ranking it with verified traits."""

import asyncio
import sys
from pathlib import Path

import click

from plantkey.cli.common import load_config, load_taxonomy, parse_traits
from plantkey.identification.adjustment import AdjustedMatch, ConfidenceAdjuster
from plantkey.identification.catalog import Organ, questions_for
from plantkey.recognition.models import RecognitionOrgan, RecognitionResult
from plantkey.recognition.plantnet import PlantNetClient, RecognitionError
from plantkey.system.path_resolver import PathResolver
from plantkey.taxonomy.store import TaxonomyDataError

_CONTENT_TYPES = {".png": "image/png", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--organ",
    type=click.Choice([organ.value for organ in Organ]),
    default=Organ.FLOWER.value,
    show_default=True,
    help="Organ shown in the photo",
)
@click.option(
    "--verify",
    "verified",
    multiple=True,
    help="Verified trait as Category=Value (repeatable), e.g. Flower_Color=white",
)
def identify(image: Path, organ: str, verified: tuple[str, ...]) -> None:
    """Identify a plant photo with PlantNet.

    Verified traits adjust the confidence of the top candidates that have a local
    taxonomy record.

    Examples:
        # Identify a flower photo
        plantkey-identify photo.jpg --organ flower

        # Boost candidates whose flowers are white
        plantkey-identify photo.jpg --organ flower --verify Flower_Color=white
    """
    verified_traits = parse_traits(verified)

    path_resolver = PathResolver()
    config = load_config(path_resolver)
    client = PlantNetClient(config.recognition)

    try:
        result = asyncio.run(
            client.identify(
                image.read_bytes(),
                RecognitionOrgan.from_organ(organ),
                filename=image.name,
                content_type=_CONTENT_TYPES.get(image.suffix.lower(), "image/jpeg"),
            )
        )
    except RecognitionError as e:
        click.echo(click.style(f"Identification failed: {e}", fg="red"), err=True)
        sys.exit(1)

    if result.is_empty:
        click.echo("No species found in the image.")
        return

    _display_raw(result)

    try:
        store = load_taxonomy(path_resolver)
    except TaxonomyDataError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    adjuster = ConfidenceAdjuster(store, config.scoring)
    ranked = adjuster.rank(result.candidates, verified_traits, questions_for(organ))
    _display_adjusted(ranked, len(verified_traits))


def _display_raw(result: RecognitionResult) -> None:
    click.echo(click.style("PlantNet candidates:", bold=True))
    for rank, candidate in enumerate(result.candidates, start=1):
        click.echo(
            f"{rank:>2}. {candidate.scientific_name} ({candidate.common_names_display()}) "
            f"{candidate.score:.0%}"
        )


def _display_adjusted(ranked: list[AdjustedMatch], verified_count: int) -> None:
    click.echo()
    click.echo(click.style(f"Adjusted with {verified_count} verified trait(s):", bold=True))
    for rank, match in enumerate(ranked, start=1):
        if match.in_local_taxonomy:
            note = f"{match.verified_trait_count} verified"
        else:
            note = "no local record"
        click.echo(
            f"{rank:>2}. {match.candidate.scientific_name} "
            f"{match.raw_score:.0%} -> {match.adjusted_score:.0%} ({note})"
        )


def main() -> None:
    """Entry point for the identify CLI."""
    identify()


if __name__ == "__main__":
    main()
