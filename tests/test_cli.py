import json
from unittest import mock

import pytest

from leetlog.timer import run_countdown as real_run_countdown

PAGE = """
<link rel="canonical" href="https://leetcode.com/problems/two-sum/">
<div class="text-title-large"><a>Two Sum</a></div>
<div class="text-difficulty-easy">Easy</div>
<div data-track-load="description_content"><p>Find <code>target</code>.</p></div>
<div class="view-lines"><div class="view-line">return []</div></div>
"""


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "two-sum.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


@pytest.fixture
def runner(app_instance):
    return app_instance.test_cli_runner()


def test_scrape_prints_metadata(runner, page_file):
    result = runner.invoke(args=["scrape", str(page_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["problem_name"] == "Two Sum"
    assert data["difficulty"] == "Easy"
    assert data["description"] == "Find `target`."


def test_practice_logs_attempt(runner, page_file):
    relay = mock.Mock()
    relay.start_timer.return_value = "page-1"
    relay.solved.return_value = {"success": True, "attempt": 1}

    def instant(session, on_tick=None, **kwargs):
        return real_run_countdown(session, sleep=lambda _: None, on_tick=on_tick)

    with mock.patch("leetlog.cli.RelayClient", return_value=relay), \
            mock.patch("leetlog.cli.run_countdown", side_effect=instant):
        result = runner.invoke(args=["practice", str(page_file), "--status", "Solved"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Time is up!" in result.output
    assert "Logged attempt 1 in 10 min" in result.output
    page_id, attempt, code = relay.solved.call_args.args
    assert page_id == "page-1"
    assert attempt.solve_status == "Solved"
    assert attempt.emoji == "✅"
    assert code == "return []"


def test_practice_rejects_unscrapable_page(runner, tmp_path):
    path = tmp_path / "empty.html"
    path.write_text("<p>nothing</p>", encoding="utf-8")
    result = runner.invoke(args=["practice", str(path)])
    assert result.exit_code != 0
    assert "Could not scrape problem data" in result.output
