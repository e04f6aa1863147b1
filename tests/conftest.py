"""Shared fixtures: a fresh in-memory browser and router per test."""

from collections.abc import Iterator

import pytest

from warble.router import Router
from warble.testing import Browser


@pytest.fixture
def browser() -> Browser:
    return Browser("http://localhost/")


@pytest.fixture
def router(browser: Browser) -> Iterator[Router]:
    r = Router(browser.window)
    yield r
    r.close()
