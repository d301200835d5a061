"""CLI command for inspecting the daily Observe quota."""

import click

from plantkey.cli.common import load_config
from plantkey.quota.factory import create_quota_tracker
from plantkey.quota.tracker import QuotaOutcome
from plantkey.system.path_resolver import PathResolver


@click.command()
@click.option("--record", is_flag=True, help="Record one answer before showing the status")
def quota(record: bool) -> None:
    """Show how many Observe answers are left today."""
    path_resolver = PathResolver()
    config = load_config(path_resolver)
    tracker = create_quota_tracker(config, path_resolver)

    if record:
        outcome = tracker.record_answer()
        if outcome is QuotaOutcome.DENIED:
            click.echo(click.style("Answer denied: daily limit reached.", fg="yellow"))
        else:
            click.echo(click.style("Answer recorded.", fg="green"))

    status = tracker.status()
    click.echo(f"Tier: {config.user_tier.value}")
    click.echo(f"Date: {status.date.isoformat()}")
    if status.unlimited:
        click.echo("Answers: unlimited")
        return

    click.echo(f"Answers used: {status.count}/{status.limit}")
    click.echo(f"Remaining: {status.remaining}")
    if status.upgrade_required:
        click.echo("Upgrade to keep answering today.")


def main() -> None:
    """Entry point for the quota CLI."""
    quota()


if __name__ == "__main__":
    main()
