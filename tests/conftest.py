"""Shared pytest fixtures for flow compiler tests."""

import pytest

from flow_builders import footer, make_screen, text_input


@pytest.fixture
def two_screen_flow():
    """SCREEN_1 collects full_name and navigates; SCREEN_2 completes."""
    return [
        make_screen(
            "SCREEN_1",
            text_input("full_name"),
            footer("navigate", next={"type": "screen", "name": "SCREEN_2"}),
        ),
        make_screen(
            "SCREEN_2",
            {"type": "TextBody", "text": "Thanks!"},
            footer("complete"),
        ),
    ]


@pytest.fixture
def three_screen_flow():
    """name on screen 0, email on screen 1, completion on screen 2."""
    return [
        make_screen("NAME", text_input("name"), footer("navigate")),
        make_screen("EMAIL", text_input("email"), footer("navigate")),
        make_screen("DONE", {"type": "TextHeading", "text": "Done"}, footer("complete")),
    ]
