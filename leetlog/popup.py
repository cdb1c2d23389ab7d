"""What the extension popup does, minus the DOM: one session, two relay calls."""
import logging

from .relay_client import RelayError
from .timer import PracticeSession

logger = logging.getLogger(__name__)


class PopupController:
    def __init__(self, problem, relay, on_expire=None):
        self.problem = problem
        self.relay = relay
        self.session = PracticeSession(problem.difficulty, on_expire=on_expire)
        self.page_id = None
        self.result = None

    def start(self):
        """Start the countdown, then ask the relay for the problem's page.

        A relay failure is logged and the countdown keeps going.
        """
        self.session.start()
        try:
            self.page_id = self.relay.start_timer(self.problem)
        except RelayError as e:
            logger.error("Error creating Notion page: %s", e)
        return self.session

    def stop_early(self):
        self.session.stop_early()

    def extend(self):
        self.session.extend()

    def submit(self, solve_status, code=""):
        if not self.page_id:
            raise RelayError("No Notion page ID available. Cannot update.")
        # keep the reviewed result so a failed send can be retried
        if self.result is None:
            self.result = self.session.review(solve_status)
        return self.relay.solved(self.page_id, self.result, code)
