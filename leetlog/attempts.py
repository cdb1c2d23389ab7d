"""Property shapes and the three-slot spaced repetition bookkeeping."""
from dataclasses import dataclass, field

MAX_ATTEMPTS = 3

TITLE_PROPERTY = "Problem Name"
ALL_REVIEWED_EMOJI = "⭐"
DEFAULT_EMOJI = "✅"


class AttemptsExhausted(Exception):
    """All review slots on the page already hold a duration."""


@dataclass
class AttemptState:
    repetitions: int = 0
    durations: list = field(default_factory=lambda: [None] * MAX_ATTEMPTS)


def _number(properties, name):
    prop = properties.get(name) or {}
    return prop.get("number")


def read_attempt_state(properties) -> AttemptState:
    return AttemptState(
        repetitions=_number(properties, "Repetitions") or 0,
        durations=[_number(properties, f"Duration {n}") for n in range(1, MAX_ATTEMPTS + 1)],
    )


def next_slot(state: AttemptState) -> int:
    """First empty duration slot, 1-based. A zero duration counts as empty."""
    for index, duration in enumerate(state.durations):
        if not duration:
            return index + 1
    raise AttemptsExhausted(f"Maximum review attempts ({MAX_ATTEMPTS}) already completed")


def build_update_properties(state: AttemptState, solve_status, time_spent, date):
    slot = next_slot(state)
    properties = {
        "Status": {"type": "select", "select": {"name": solve_status}},
        "Repetitions": {"type": "number", "number": state.repetitions + 1},
        f"Duration {slot}": {"type": "number", "number": time_spent},
        f"Review Date {slot}": {"type": "date", "date": {"start": date}},
    }
    return slot, properties


def icon_for(state: AttemptState, slot, emoji=None):
    filled = [bool(d) for d in state.durations]
    filled[slot - 1] = True
    name = ALL_REVIEWED_EMOJI if all(filled) else (emoji or DEFAULT_EMOJI)
    return {"type": "emoji", "emoji": name}


def page_title(page) -> str:
    prop = page.get("properties", {}).get(TITLE_PROPERTY) or {}
    return "".join(t.get("plain_text", "") for t in prop.get("title", []))


def find_exact_title(results, problem_name):
    """The page whose title equals ``problem_name`` ignoring case and padding."""
    wanted = problem_name.strip().lower()
    for page in results:
        if page_title(page).strip().lower() == wanted:
            return page
    return None


def title_filter(problem_name):
    return {"property": TITLE_PROPERTY, "title": {"contains": problem_name.strip()}}


def new_page_properties(problem_name, topic, difficulty, source="LeetCode"):
    return {
        TITLE_PROPERTY: {"title": [{"type": "text", "text": {"content": problem_name}}]},
        "Topic": {"multi_select": [{"name": topic}]},
        "Difficulty": {"select": {"name": difficulty}},
        "Source": {"select": {"name": source}},
    }
