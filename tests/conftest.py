"""Shared fixtures: API payloads shaped like incarnateword.in responses."""
from __future__ import annotations

from typing import Any, Dict

import pytest

BASE_URL = "https://incarnateword.in"
CHAPTER_URL = "/cwsa/21/the-human-aspiration"


@pytest.fixture()
def base_url() -> str:
    return BASE_URL


@pytest.fixture()
def chapter_url() -> str:
    return CHAPTER_URL


@pytest.fixture()
def flat_chapter_payload() -> Dict[str, Any]:
    return {
        "txt": (
            "The first paragraph speaks of matter and its limits.\n\n"
            "The second paragraph speaks of the divine life, as all seekers know."
        )
    }


@pytest.fixture()
def sectioned_chapter_payload() -> Dict[str, Any]:
    return {
        "items": [
            {"t": "Section One", "txt": "Alpha paragraph.\n\nBeta paragraph."},
            {"t": "Section Two", "txt": "Gamma paragraph."},
        ]
    }


@pytest.fixture()
def search_payload() -> Dict[str, Any]:
    return {
        "c": [
            {
                "url": CHAPTER_URL,
                "t": "The Human Aspiration",
                "txt": "speaks of the <strong>divine life</strong>, as all seekers",
                "path": [
                    {"t": "Sri Aurobindo", "u": "/sa"},
                    {"t": "The Life Divine", "u": "/cwsa/21"},
                    {"t": "Book One"},
                    {"t": "Chapter I"},
                ],
                "searchedIn": "volumes",
            }
        ],
        "Paging": {"TotalCount": 1, "TotalPagesCount": 1},
        "suggesters": ["divine love"],
    }
