"""Pull problem metadata out of a saved LeetCode problem page.

The selectors mirror the live site's class names and will break whenever
the site's markup changes.
"""
import logging
from dataclasses import dataclass, asdict

from bs4 import BeautifulSoup

from .formatter import format_description

logger = logging.getLogger(__name__)

PROBLEM_URL_PREFIX = "https://leetcode.com/problems/"
UNKNOWN = "Unknown"

SELECTORS = {
    "problem_name": "div[class*='text-title-large'] a",
    "difficulty": "div[class*='text-difficulty-']",
    "difficulty_fallback": "div.flex.gap-1 div",
    "topics_section": "div.mt-6.flex.flex-col.gap-3",
    "topic_fallback": "a[href^='/tag/']",
    "description": "div[data-track-load='description_content']",
    "canonical": "link[rel='canonical']",
    "code_lines": ".view-lines .view-line",
}


@dataclass
class ProblemData:
    problem_name: str = UNKNOWN
    difficulty: str = UNKNOWN
    topic: str = UNKNOWN
    description: str = ""
    url: str = ""

    @property
    def is_complete(self) -> bool:
        return self.problem_name != UNKNOWN and self.difficulty != UNKNOWN

    def to_payload(self):
        """Body for the relay's start-timer endpoint."""
        return {
            "problemName": self.problem_name,
            "difficulty": self.difficulty,
            "topic": self.topic,
            "description": self.description,
        }

    def to_dict(self):
        return asdict(self)


def is_problem_page(url) -> bool:
    return bool(url) and url.startswith(PROBLEM_URL_PREFIX)


def _text_of(soup, selector):
    element = soup.select_one(selector)
    if element is None:
        return None
    text = element.get_text(strip=True)
    return text or None


def _scrape_topic(soup):
    # topics sit in the 4th block of the side panel, first tag link wins
    main = soup.select_one(SELECTORS["topics_section"])
    if main is not None:
        children = main.find_all(recursive=False)
        if len(children) > 3:
            inner = children[3].select_one("div.flex.flex-col")
            if inner is not None:
                inner_children = inner.find_all(recursive=False)
                if len(inner_children) > 1:
                    first = inner_children[1].find("div")
                    anchor = first.find("a") if first is not None else None
                    if anchor is not None and anchor.get_text(strip=True):
                        return anchor.get_text(strip=True)
    return _text_of(soup, SELECTORS["topic_fallback"])


def scrape_problem(html: str) -> ProblemData:
    soup = BeautifulSoup(html or "", "html.parser")

    difficulty = _text_of(soup, SELECTORS["difficulty"]) or _text_of(
        soup, SELECTORS["difficulty_fallback"]
    )

    description_node = soup.select_one(SELECTORS["description"])
    description = format_description(description_node.decode_contents()) if description_node else ""

    canonical = soup.select_one(SELECTORS["canonical"])
    url = canonical.get("href", "") if canonical is not None else ""

    data = ProblemData(
        problem_name=_text_of(soup, SELECTORS["problem_name"]) or UNKNOWN,
        difficulty=difficulty or UNKNOWN,
        topic=_scrape_topic(soup) or UNKNOWN,
        description=description,
        url=url,
    )
    logger.info(
        "Scraped problem %r (%s, %s), description %d chars",
        data.problem_name, data.difficulty, data.topic, len(data.description),
    )
    return data


def scrape_code(html: str) -> str:
    """Editor contents from the Monaco view lines, or an empty string."""
    soup = BeautifulSoup(html or "", "html.parser")
    lines = [line.get_text().replace("\xa0", " ") for line in soup.select(SELECTORS["code_lines"])]
    return "\n".join(lines).rstrip()
