import logging

import requests

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """The relay could not be reached or reported a failure."""


class RelayClient:
    def __init__(self, base_url="http://127.0.0.1:3000", timeout=30, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path, payload):
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RelayError(f"Failed to communicate with the server: {e}") from e
        try:
            data = response.json()
        except ValueError as e:
            raise RelayError(f"Unexpected response from the server ({response.status_code})") from e
        if not data.get("success"):
            raise RelayError(data.get("error") or data.get("message") or "Unknown error")
        return data

    def start_timer(self, problem):
        """Register the problem page; returns the page id."""
        data = self._post("/pages/start-timer", problem.to_payload())
        logger.info("Notion page ready: %s (%s)", data.get("pageId"), data.get("message"))
        return data.get("pageId")

    def solved(self, page_id, result, code=""):
        data = self._post("/pages/solved", result.to_payload(page_id, code))
        logger.info("Attempt %s recorded on %s", data.get("attempt"), page_id)
        return data
