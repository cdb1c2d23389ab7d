from unittest import mock

import pytest

from leetlog import create_app
from leetlog.notion import notion

TEST_CONFIG = {
    "TESTING": True,
    "NOTION_KEY": "secret_test",
    "NOTION_DATASOURCE_ID": "ds-123",
    "NOTION_API_URL": "https://notion.test/v1",
    "LOG_LEVEL": "WARNING",
}


@pytest.fixture(scope="session")
def app_instance():
    return create_app(TEST_CONFIG)


@pytest.fixture(autouse=True)
def app_context(app_instance):
    ctx = app_instance.app_context()
    ctx.push()
    yield
    ctx.pop()


@pytest.fixture
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture
def fake_notion():
    """Replace every Notion endpoint call with a mock."""
    with mock.patch.multiple(
        notion,
        query_data_source=mock.DEFAULT,
        create_page=mock.DEFAULT,
        retrieve_page=mock.DEFAULT,
        update_page=mock.DEFAULT,
        append_block_children=mock.DEFAULT,
    ) as mocks:
        mocks["query_data_source"].return_value = {"results": []}
        mocks["update_page"].return_value = {"id": "page-1"}
        mocks["append_block_children"].return_value = []
        yield mocks


@pytest.fixture
def make_page():
    """Build a Notion page payload; number properties use _ for spaces."""

    def _make(title="Two Sum", page_id="page-1", **numbers):
        properties = {"Problem Name": {"title": [{"plain_text": title}]}}
        for name, value in numbers.items():
            properties[name.replace("_", " ")] = {"number": value}
        return {"id": page_id, "properties": properties}

    return _make
