"""Parser for public channel previews (https://t.me/s/<channel>)."""

import re
from datetime import datetime
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from loguru import logger

from alarmbot.errors import FetchError
from alarmbot.schemas import Candidate

MESSAGE_CLASS = "tgme_widget_message"
TEXT_CLASS = "tgme_widget_message_text"
REPLY_CLASS = "tgme_widget_message_reply"
DATE_SELECTOR = ".tgme_widget_message_date time"

RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$", re.IGNORECASE
)


def parse_channel_page(html: Union[bytes, str]) -> list[Candidate]:
    """Extract posts in document order."""
    try:
        soup = BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as e:
        raise FetchError("can't parse channel page", e) from e

    candidates = []
    for post in soup.find_all(class_=MESSAGE_CLASS):
        post_id = post.get("data-post")
        if not post_id:
            logger.debug("Skipping post without data-post attribute")
            continue

        candidates.append(
            Candidate(
                id=post_id,
                text=_post_text(post),
                timestamp=_post_timestamp(post),
            )
        )

    return candidates


def _post_text(post: Tag) -> str:
    reply = post.find(class_=REPLY_CLASS)
    if reply is not None:
        # A reply quotes the original; the answer is in the next sibling
        sibling = reply.find_next_sibling()
        if sibling is None:
            return ""
        if TEXT_CLASS in (sibling.get("class") or []):
            return _text(sibling)
        return "".join(_text(el) for el in sibling.find_all(class_=TEXT_CLASS))

    body = post.find(class_=TEXT_CLASS)
    return _text(body) if body is not None else ""


def _text(element: Tag) -> str:
    for br in element.find_all("br"):
        br.replace_with("\n")
    return element.get_text()


def _post_timestamp(post: Tag) -> Optional[datetime]:
    time_tag = post.select_one(DATE_SELECTOR)
    if time_tag is None:
        return None
    return parse_timestamp(time_tag.get("datetime"))


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp. Anything else, offset-less values included, is None."""
    if not value or not RFC3339_RE.fullmatch(value):
        return None
    try:
        return datetime.fromisoformat(value.upper())
    except ValueError:
        return None
