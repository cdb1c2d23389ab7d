from unittest import mock

import pytest
import requests

from leetlog.popup import PopupController
from leetlog.relay_client import RelayClient, RelayError
from leetlog.scraper import ProblemData
from leetlog.timer import REVIEWED, RUNNING

PROBLEM = ProblemData("Two Sum", "Easy", "Array", "Find two numbers.")


def _response(body):
    response = mock.Mock()
    response.status_code = 200
    response.json.return_value = body
    return response


@pytest.fixture
def http():
    return mock.Mock()


@pytest.fixture
def relay(http):
    return RelayClient("http://relay.test/", session=http)


def test_start_timer_posts_problem(relay, http):
    http.post.return_value = _response({"success": True, "pageId": "page-9", "message": "Existing page found"})

    assert relay.start_timer(PROBLEM) == "page-9"
    url = http.post.call_args.args[0]
    assert url == "http://relay.test/pages/start-timer"
    assert http.post.call_args.kwargs["json"] == {
        "problemName": "Two Sum",
        "difficulty": "Easy",
        "topic": "Array",
        "description": "Find two numbers.",
    }


def test_unsuccessful_answer_raises(relay, http):
    http.post.return_value = _response({"success": False, "message": "Maximum review attempts (3) already completed"})
    with pytest.raises(RelayError, match="Maximum review attempts"):
        relay.start_timer(PROBLEM)


def test_unreachable_relay_raises(relay, http):
    http.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(RelayError, match="Failed to communicate"):
        relay.start_timer(PROBLEM)


def test_popup_full_attempt(relay, http):
    http.post.side_effect = [
        _response({"success": True, "pageId": "page-9"}),
        _response({"success": True, "attempt": 1, "codeSaved": True}),
    ]
    popup = PopupController(PROBLEM, relay)

    popup.start()
    assert popup.session.state == RUNNING
    for _ in range(90):
        popup.session.tick()
    popup.stop_early()
    response = popup.submit("Solved", code="print(1)")

    assert response["attempt"] == 1
    assert popup.session.state == REVIEWED
    sent = http.post.call_args.kwargs["json"]
    assert sent["pageId"] == "page-9"
    assert sent["timeSpent"] == 2
    assert sent["emoji"] == "❇️"
    assert sent["code"] == "print(1)"


def test_relay_failure_keeps_countdown_running(relay, http):
    http.post.side_effect = requests.ConnectionError("refused")
    popup = PopupController(PROBLEM, relay)

    popup.start()

    assert popup.session.state == RUNNING
    assert popup.page_id is None
    popup.stop_early()
    with pytest.raises(RelayError, match="No Notion page ID"):
        popup.submit("Solved")


def test_failed_submit_can_be_retried(relay, http):
    http.post.side_effect = [
        _response({"success": True, "pageId": "page-9"}),
        requests.Timeout("slow"),
        _response({"success": True, "attempt": 2}),
    ]
    popup = PopupController(PROBLEM, relay)
    popup.start()
    popup.stop_early()

    with pytest.raises(RelayError):
        popup.submit("Solved")
    assert popup.submit("Solved")["attempt"] == 2
