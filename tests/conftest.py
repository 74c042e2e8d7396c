"""Shared fixtures for the slidestream test suite."""

from __future__ import annotations

import json

import pytest


def _decode_sse(text: str) -> list[dict]:
    """Decode the ``data:`` lines of an event stream, skipping any other output."""
    return [
        json.loads(line[len("data:"):].strip())
        for line in text.splitlines()
        if line.startswith("data:")
    ]


@pytest.fixture
def parse_sse():
    return _decode_sse
