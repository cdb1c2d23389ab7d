"""Thin Notion REST client used by the relay."""
import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)

# Notion rejects more than 100 children in a single append call
MAX_CHILDREN_PER_REQUEST = 100


class NotionError(Exception):
    """Raised when the Notion API answers with an error or cannot be reached."""

    def __init__(self, message, status_code=500, code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @classmethod
    def from_response(cls, response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") or response.text or response.reason
        return cls(message, status_code=response.status_code, code=body.get("code"))


class _NotionState:
    """Per-app settings and HTTP session, kept in ``app.extensions``."""

    def __init__(self, config):
        self.api_key = config.get("NOTION_KEY", "")
        self.data_source_id = config.get("NOTION_DATASOURCE_ID", "")
        self.base_url = config.get("NOTION_API_URL", "https://api.notion.com/v1").rstrip("/")
        self.version = config.get("NOTION_VERSION", "2025-09-03")
        self.timeout = config.get("NOTION_TIMEOUT", 30)
        self.session = requests.Session()


class NotionClient:
    """Wraps the handful of Notion endpoints the relay needs.

    Follows the Flask extension pattern: create it at import time and bind
    it to one or more apps with ``init_app``. Calls use the settings of the
    current app.
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions["notion"] = _NotionState(app.config)

    @property
    def state(self) -> _NotionState:
        return current_app.extensions["notion"]

    @property
    def is_configured(self) -> bool:
        state = self.state
        return bool(state.api_key and state.data_source_id)

    def _request(self, method, path, payload=None):
        state = self.state
        headers = {
            "Authorization": f"Bearer {state.api_key}",
            "Notion-Version": state.version,
            "Content-Type": "application/json",
        }
        try:
            response = state.session.request(
                method, f"{state.base_url}{path}", json=payload, headers=headers, timeout=state.timeout
            )
        except requests.RequestException as e:
            logger.error("Notion %s %s failed: %s", method, path, e)
            raise NotionError(f"Could not reach Notion: {e}", status_code=502) from e

        if not response.ok:
            error = NotionError.from_response(response)
            logger.error(
                "Notion %s %s returned %s (%s): %s",
                method, path, error.status_code, error.code, error.message,
            )
            raise error
        return response.json()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def query_data_source(self, data_source_id=None, filter=None):
        payload = {"filter": filter} if filter else {}
        return self._request(
            "POST", f"/data_sources/{data_source_id or self.state.data_source_id}/query", payload
        )

    def create_page(self, parent, properties, icon=None):
        payload = {"parent": parent, "properties": properties}
        if icon:
            payload["icon"] = icon
        return self._request("POST", "/pages", payload)

    def retrieve_page(self, page_id):
        return self._request("GET", f"/pages/{page_id}")

    def update_page(self, page_id, properties=None, icon=None):
        payload = {}
        if properties:
            payload["properties"] = properties
        if icon:
            payload["icon"] = icon
        return self._request("PATCH", f"/pages/{page_id}", payload)

    def append_block_children(self, block_id, children):
        """Append blocks under ``block_id`` in batches; returns the appended results."""
        results = []
        for start in range(0, len(children), MAX_CHILDREN_PER_REQUEST):
            batch = children[start:start + MAX_CHILDREN_PER_REQUEST]
            data = self._request("PATCH", f"/blocks/{block_id}/children", {"children": batch})
            results.extend(data.get("results", []))
        return results


notion = NotionClient()
