import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Interpret typical truthy strings from environment variables."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    NOTION_KEY = os.getenv("NOTION_KEY", "")
    # id of the data source (not the database) that holds the problem pages
    NOTION_DATASOURCE_ID = os.getenv("NOTION_DATASOURCE_ID", "")
    NOTION_API_URL = os.getenv("NOTION_API_URL", "https://api.notion.com/v1")
    NOTION_VERSION = os.getenv("NOTION_VERSION", "2025-09-03")
    NOTION_TIMEOUT = float(os.getenv("NOTION_TIMEOUT", "30"))

    PROBLEM_SOURCE = os.getenv("PROBLEM_SOURCE", "LeetCode")
    CODE_LANGUAGE = os.getenv("CODE_LANGUAGE", "python")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # popup side
    RELAY_URL = os.getenv("RELAY_URL", "http://127.0.0.1:3000")
    PORT = int(os.getenv("PORT", "3000"))
    DEBUG = _env_flag("FLASK_DEBUG", default=False)
