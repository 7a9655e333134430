"""Shared fakes."""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeTelegram:
    """Records sent messages; scripted getUpdates answers."""

    def __init__(self, updates=None, fail_send_for=()):
        self.updates_script = list(updates or [])
        self.update_calls: list[tuple[int, int]] = []
        self.sent: list[tuple[object, str]] = []
        self.fail_send_for = set(fail_send_for)
        self.closed = False

    async def updates(self, offset: int, limit: int):
        self.update_calls.append((offset, limit))
        result = self.updates_script.pop(0) if self.updates_script else []
        if isinstance(result, Exception):
            raise result
        return result

    async def send_message(self, chat_id, text: str) -> None:
        if text in self.fail_send_for:
            raise RuntimeError(f"send failed for {text!r}")
        self.sent.append((chat_id, text))

    async def close(self) -> None:
        self.closed = True


class FakePages:
    def __init__(self, pages=None):
        self.pages = list(pages or [])
        self.urls: list[str] = []
        self.closed = False

    async def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        page = self.pages.pop(0) if len(self.pages) > 1 else self.pages[0]
        if isinstance(page, Exception):
            raise page
        return page.encode() if isinstance(page, str) else page

    async def close(self) -> None:
        self.closed = True


START = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def post(post_id: str, text: str, when: str = "2024-05-01T12:05:00+00:00", reply: str = "") -> str:
    """Markup for one post as rendered by t.me/s/<channel>."""
    reply_block = ""
    if reply:
        reply_block = (
            '<a class="tgme_widget_message_reply" href="#">'
            f'<div class="tgme_widget_message_text js-message_reply_text">{reply}</div></a>'
        )
    date = f'<time datetime="{when}" class="time">12:05</time>' if when else ""
    return (
        '<div class="tgme_widget_message_wrap">'
        f'<div class="tgme_widget_message js-widget_message" data-post="{post_id}">'
        '<div class="tgme_widget_message_bubble">'
        f"{reply_block}"
        f'<div class="tgme_widget_message_text js-message_text">{text}</div>'
        '<div class="tgme_widget_message_footer">'
        f'<a class="tgme_widget_message_date" href="#">{date}</a>'
        "</div></div></div></div>"
    )


def page(*posts: str) -> str:
    return f'<html><body><section class="tgme_channel_history">{"".join(posts)}</section></body></html>'


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def telegram():
    return FakeTelegram()
