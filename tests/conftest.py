"""Shared test fixtures for eletters."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from eletters.document.ids import SequentialIds
from eletters.document.models import (
    Element,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)
from eletters.llm.base import LLMProvider
from eletters.llm.models import LLMConfig, LLMResponse, TokenUsage


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def survey_letter():
    """One scroll screen: header, three questions, a Submit button."""
    return Letter(
        id="letter-1",
        title="Coffee survey",
        language="en",
        screens=[
            Screen(
                id="s1",
                order=1,
                mode=ScreenMode.scroll,
                style=ScreenStyle(background="#ffffff", element_spacing=12),
                nav_done_label="Finish",
                elements=[
                    Element(id="h1", type=ElementType.header, content="Coffee survey"),
                    Element(
                        id="q1",
                        type=ElementType.rating,
                        content="How was the coffee?",
                        props={"max": 5, "scaleType": "stars"},
                    ),
                    Element(
                        id="q2",
                        type=ElementType.single_choice,
                        content="Which roast?",
                        props={"options": [{"label": "Light"}, {"label": "Dark"}]},
                    ),
                    Element(id="q3", type=ElementType.input, content="Anything else?"),
                    Element(id="b1", type=ElementType.button, content="Submit"),
                ],
            )
        ],
    )


@pytest.fixture
def two_screen_letter():
    """Two screens given out of order, one nested element on the second."""
    return Letter(
        id="letter-2",
        title="Welcome",
        screens=[
            Screen(
                id="s2",
                order=2,
                elements=[
                    Element(id="g1", type=ElementType.group),
                    Element(id="q5", type=ElementType.date, content="When?", parent_id="g1"),
                    Element(id="q6", type=ElementType.ranking, content="Rank these"),
                ],
            ),
            Screen(
                id="s1",
                order=1,
                elements=[
                    Element(id="p1", type=ElementType.paragraph, content="Hello"),
                    Element(id="q4", type=ElementType.multiple_choice, content="Pick any"),
                ],
            ),
        ],
    )


@pytest.fixture
def informative_letter():
    return Letter(
        id="letter-3",
        title="",
        screens=[
            Screen(id="a", order=1, elements=[Element(id="t", type=ElementType.paragraph, content="Hi")]),
            Screen(id="b", order=2, elements=[]),
        ],
    )


@pytest.fixture
def letter_file(tmp_path, survey_letter):
    path = tmp_path / "letter.json"
    path.write_text(json.dumps(survey_letter.to_json()))
    return path


@pytest.fixture
def llm_letter_json():
    """A letter as an LLM might return it: camelCase, one unknown element type."""
    return {
        "id": "ai-1",
        "title": "Team check-in",
        "language": "en",
        "screens": [
            {
                "id": "screen-a",
                "order": 1,
                "mode": "scroll",
                "style": {"background": "#ffffff", "elementSpacing": 12},
                "elements": [
                    {"id": "e1", "type": "header", "content": "Team check-in"},
                    {"id": "e2", "type": "rating", "content": "Mood?", "props": {"max": 5}},
                    {"id": "e3", "type": "carousel", "content": "not supported"},
                    {"id": "e4", "type": "button", "content": "Submit"},
                ],
            }
        ],
    }


@pytest.fixture
def mock_llm_provider(llm_letter_json):
    provider = MagicMock(spec=LLMProvider)
    provider.name = "Gemini"
    provider.config = LLMConfig(provider="google", model="test-model")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content=json.dumps(llm_letter_json),
            usage=TokenUsage(input_tokens=100, output_tokens=250),
            model="test-model",
        )
    )
    return provider
