"""Terminal stand-in for the extension popup, registered as Flask CLI commands."""
import json
import logging
from pathlib import Path

import click
from flask import current_app

from .popup import PopupController
from .relay_client import RelayClient, RelayError
from .scraper import is_problem_page, scrape_code, scrape_problem
from .timer import EXPIRED, READ_SOLUTION, format_time, run_countdown

logger = logging.getLogger(__name__)

SOLVE_STATUSES = ["Solved", "Solved with Hints", READ_SOLUTION, "Not Solved"]


def _read(path):
    return Path(path).read_text(encoding="utf-8")


def _show_tick(session):
    click.echo(f"\r{session.display} ", nl=False)


def _countdown(controller):
    """Run until time is up or the user hits Ctrl-C."""
    try:
        run_countdown(controller.session, on_tick=_show_tick)
    except KeyboardInterrupt:
        controller.stop_early()
        click.echo(f"\nStopped early at {controller.session.display}.")


def register_commands(app):
    @app.cli.command("scrape")
    @click.argument("page", type=click.Path(exists=True, dir_okay=False))
    def scrape_command(page):
        """Print what would be scraped from a saved problem PAGE."""
        data = scrape_problem(_read(page))
        click.echo(json.dumps(data.to_dict(), indent=2, ensure_ascii=False))

    @app.cli.command("practice")
    @click.argument("page", type=click.Path(exists=True, dir_okay=False))
    @click.option("--code", "code_file", type=click.Path(exists=True, dir_okay=False),
                  help="Solution file to attach; defaults to the editor contents of PAGE.")
    @click.option("--status", type=click.Choice(SOLVE_STATUSES), default=None,
                  help="Solve status to record without prompting.")
    @click.option("--relay", default=None, help="Relay base URL.")
    def practice_command(page, code_file, status, relay):
        """Time an attempt at the problem saved in PAGE and log it to Notion."""
        html = _read(page)
        problem = scrape_problem(html)
        if problem.url and not is_problem_page(problem.url):
            logger.warning("%s does not look like a problem page", problem.url)
        if not problem.is_complete:
            raise click.ClickException("Could not scrape problem data")

        client = RelayClient(relay or current_app.config["RELAY_URL"])
        controller = PopupController(
            problem, client, on_expire=lambda s: click.echo("\n⏰ Time is up!")
        )
        controller.start()
        click.echo(f"{problem.problem_name} ({problem.difficulty}): "
                   f"{format_time(controller.session.total_seconds)} on the clock. Ctrl-C when done.")

        _countdown(controller)
        while controller.session.state == EXPIRED and click.confirm("Extend?", default=False):
            controller.extend()
            _countdown(controller)

        status = status or click.prompt(
            "Solve status", type=click.Choice(SOLVE_STATUSES), default=SOLVE_STATUSES[0]
        )
        code = _read(code_file) if code_file else scrape_code(html)
        try:
            response = controller.submit(status, code)
        except RelayError as e:
            raise click.ClickException(f"Error updating Notion page: {e}")
        click.echo(f"Logged attempt {response.get('attempt')} in "
                   f"{controller.result.time_spent} min {controller.result.emoji}")
