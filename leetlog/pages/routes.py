import logging

from flask import Blueprint, current_app, request

from ..attempts import (
    AttemptsExhausted,
    build_update_properties,
    find_exact_title,
    icon_for,
    new_page_properties,
    read_attempt_state,
    title_filter,
)
from ..blocks import code_blocks, description_blocks
from ..notion import NotionError, notion

logger = logging.getLogger(__name__)

pages_bp = Blueprint("pages", __name__)


def _body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _invalid(data, *fields):
    """Fields that are absent, blank or not strings."""
    return [f for f in fields if not isinstance(data.get(f), str) or not data[f].strip()]


def _text(data, field):
    value = data.get(field)
    return value if isinstance(value, str) else ""


@pages_bp.route("/pages/start-timer", methods=["POST"])
def start_timer():
    """Find the problem's page or create it with the scraped description."""
    data = _body()
    problem_name = data.get("problemName")
    difficulty = data.get("difficulty")
    topic = data.get("topic")
    description = _text(data, "description")

    logger.info(
        "start-timer: %r difficulty=%s topic=%s description=%d chars",
        problem_name, difficulty, topic, len(description),
    )

    if _invalid(data, "problemName", "difficulty", "topic"):
        return {
            "success": False,
            "error": "Missing required fields: problemName, difficulty, or topic",
        }, 400

    data_source_id = current_app.config["NOTION_DATASOURCE_ID"]

    # "contains" is broad, so narrow it to an exact title here
    search = notion.query_data_source(data_source_id, filter=title_filter(problem_name))
    existing = find_exact_title(search.get("results", []), problem_name)
    if existing:
        logger.info("Reusing page %s for %r", existing["id"], problem_name)
        return {"success": True, "pageId": existing["id"], "message": "Existing page found"}, 200

    page = notion.create_page(
        parent={"type": "data_source_id", "data_source_id": data_source_id},
        properties=new_page_properties(
            problem_name, topic, difficulty, current_app.config["PROBLEM_SOURCE"]
        ),
    )
    logger.info("Created page %s for %r", page["id"], problem_name)

    if description.strip():
        blocks = description_blocks(description)
        try:
            notion.append_block_children(page["id"], blocks)
            logger.info("Added %d description blocks to %s", len(blocks), page["id"])
        except NotionError as e:
            # the page itself exists, so the timer can still start
            logger.error("Could not add description to %s: %s", page["id"], e.message)

    return {"success": True, "pageId": page["id"], "message": "Timer started successfully"}, 200


@pages_bp.route("/pages/solved", methods=["POST"])
def solved():
    """Record one attempt into the first free review slot of the page."""
    data = _body()
    page_id = data.get("pageId")
    solve_status = data.get("solveStatus")
    time_spent = data.get("timeSpent")
    date = data.get("date")
    code = _text(data, "code")

    logger.info(
        "solved: page=%s status=%s timeSpent=%s date=%s emoji=%s",
        page_id, solve_status, time_spent, date, data.get("emoji"),
    )

    bad_time = isinstance(time_spent, bool) or not isinstance(time_spent, (int, float))
    if _invalid(data, "pageId", "solveStatus", "date") or bad_time:
        return {
            "success": False,
            "error": "Missing required fields: pageId, solveStatus, timeSpent, or date",
        }, 400

    page = notion.retrieve_page(page_id)
    state = read_attempt_state(page.get("properties", {}))
    logger.debug("Current attempt state: %s", state)

    try:
        slot, properties = build_update_properties(state, solve_status, time_spent, date)
    except AttemptsExhausted as e:
        logger.info("Page %s already has every attempt recorded", page_id)
        return {"success": False, "message": str(e)}, 400

    logger.info("Recording attempt %d on %s", slot, page_id)
    notion.update_page(page_id, properties=properties)
    notion.update_page(page_id, icon=icon_for(state, slot, data.get("emoji")))

    code_saved = False
    if code.strip():
        try:
            notion.append_block_children(
                page_id, code_blocks(code, current_app.config["CODE_LANGUAGE"])
            )
            code_saved = True
        except NotionError as e:
            # properties are already written; report instead of rolling back
            logger.error("Attempt %d saved but code append failed on %s: %s", slot, page_id, e.message)

    return {
        "success": True,
        "message": "Problem marked as solved successfully",
        "attempt": slot,
        "codeSaved": code_saved,
    }, 200


@pages_bp.route("/health")
def health():
    return {
        "status": "OK",
        "message": "Server is running",
        "notionConfigured": notion.is_configured,
    }
