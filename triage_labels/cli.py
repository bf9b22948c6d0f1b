"""
Command-line entry point: copy triage labels from issues to pull requests.
"""

import logging

import click

from triage_labels import init_sentry, logger, set_log_level
from triage_labels.config import LabelerConfig
from triage_labels.context import ActionContext
from triage_labels.exceptions import ConfigurationError, ReconciliationFailed
from triage_labels.gateway import GitHubGateway
from triage_labels.reconciler import DryRunLabelActions, PullRequestLabelManager


def split_labels(_ctx, _param, value):
    """Click callback: turn "a, b,c" into ["a", "b", "c"]."""
    if value is None:
        return None
    return [label.strip() for label in value.split(",") if label.strip()]


@click.command(name="copy-issue-labels")
@click.option("-p", "--pull", "pull_numbers", type=int, multiple=True,
              help="A pull request to label. Can be given more than once. "
                   "Defaults to the pull request that triggered the workflow.")
@click.option("--repo", help="The OWNER/REPO to work in. Defaults to $GITHUB_REPOSITORY.")
@click.option("--priority-labels", callback=split_labels,
              help="Comma-separated priority labels, most severe first.")
@click.option("--classification-labels", callback=split_labels,
              help="Comma-separated classification labels.")
@click.option("--effort-labels", callback=split_labels,
              help="Comma-separated effort labels, largest first.")
@click.option("--dry-run", is_flag=True, help="Show the changes, but don't make them.")
@click.option("-v", "--verbose", is_flag=True)
def cli(pull_numbers, repo, priority_labels, classification_labels, effort_labels, dry_run, verbose):
    """
    Copy priority, classification, and effort labels from issues to the pull
    requests that close them.

    A pull request closes an issue if its description says so with a closing
    keyword, like "Fixes #123".

    Note that you must set the environment variable $GITHUB_PERSONAL_TOKEN
    (or $GITHUB_TOKEN) to a token that can edit pull requests.
    """
    if verbose:
        set_log_level(logging.DEBUG)
    init_sentry()

    try:
        config = LabelerConfig.from_settings(
            priority_labels=priority_labels,
            classification_labels=classification_labels,
            effort_labels=effort_labels,
            pull_numbers=pull_numbers or None,
        )
        context = ActionContext.from_environment(repo)
        gateway = GitHubGateway(context.repo)
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc

    actions = DryRunLabelActions() if dry_run else None
    manager = PullRequestLabelManager(gateway, config, context=context, actions=actions)

    if dry_run:
        click.echo("**Dry run only** The following changes would have been made:")

    try:
        results = manager.do_pulls()
    except ReconciliationFailed as exc:
        results = exc.results
        for number, error in sorted(exc.failures.items()):
            logger.error(f"#{number}: {error}")
        report(results)
        raise click.exceptions.Exit(1)

    report(results)


def report(results):
    for number, diff in sorted(results.items()):
        if diff.is_empty():
            click.echo(f"#{number}: no changes")
        else:
            click.echo(f"#{number}: {diff}")


if __name__ == "__main__":
    cli()   # pylint: disable=no-value-for-parameter
