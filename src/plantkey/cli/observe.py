"""CLI command for ranking local species by selected traits."""

import sys

import click

from plantkey.cli.common import load_config, load_taxonomy, parse_traits
from plantkey.identification.catalog import Organ, questions_for
from plantkey.identification.matching import ObserveMatcher
from plantkey.identification.session import ObserveSession
from plantkey.quota.factory import create_quota_tracker
from plantkey.quota.tracker import QuotaOutcome
from plantkey.system.path_resolver import PathResolver
from plantkey.taxonomy.store import TaxonomyDataError


@click.command()
@click.option(
    "--organ",
    type=click.Choice([organ.value for organ in Organ]),
    default=Organ.LEAF.value,
    show_default=True,
    help="Organ being examined",
)
@click.option(
    "--trait",
    "traits",
    multiple=True,
    help="Selected trait as Category=Value (repeatable), e.g. Leaf_Shape=ovate",
)
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
def observe(organ: str, traits: tuple[str, ...], limit: int) -> None:
    """Rank local species against the traits you observed.

    Every trait counts as one answer against the daily free quota.

    Examples:
        # Leaf with an ovate shape and serrate margin
        plantkey-observe --organ leaf --trait Leaf_Shape=ovate --trait Leaf_Margin=serrate
    """
    selected = parse_traits(traits)
    asked = {question.category.value for question in questions_for(organ)}
    for category in selected:
        if category not in asked:
            raise click.BadParameter(
                f"'{category}' is not a {organ} trait", param_hint="'--trait'"
            )

    path_resolver = PathResolver()
    config = load_config(path_resolver)
    try:
        store = load_taxonomy(path_resolver)
    except TaxonomyDataError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    session = ObserveSession(
        organ, ObserveMatcher(store), create_quota_tracker(config, path_resolver)
    )
    for category, value in selected.items():
        if session.select_trait(category, value) is QuotaOutcome.DENIED:
            click.echo(
                click.style(
                    "Daily limit reached: upgrade for unlimited Observe answers.",
                    fg="yellow",
                )
            )
            click.echo(f"Only {len(session.selected_traits)} trait(s) were applied.")
            break

    results = session.results()
    if not results:
        click.echo("No matching species.")
        return

    click.echo(f"Top matches for {session.organ.display_name.lower()} traits:")
    for rank, result in enumerate(results[:limit], start=1):
        species = result.species
        click.echo(
            f"{rank:>2}. {species.scientific_name} ({species.common_name or '-'}) "
            f"{result.match_percentage:.0f}% "
            f"[{result.matched_traits}/{result.compared_traits} traits]"
        )


def main() -> None:
    """Entry point for the observe CLI."""
    observe()


if __name__ == "__main__":
    main()
