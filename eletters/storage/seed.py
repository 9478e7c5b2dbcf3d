"""Blank letters, library templates built from the question bank, seed templates."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from eletters.document.ids import IdGenerator, RandomIds, letter_id, screen_id
from eletters.document.models import (
    Element,
    ElementStyle,
    ElementType,
    Letter,
    Screen,
    ScreenMode,
    ScreenStyle,
)
from eletters.storage.models import (
    QuestionBankItem,
    QuestionnaireTemplate,
    Template,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def create_blank_letter(ids: IdGenerator | None = None) -> Letter:
    """Blank "No title" letter with one empty scrolling screen."""
    ids = ids or RandomIds()
    return Letter(
        id=letter_id(ids),
        title="No title",
        language="en",
        screens=[Screen(id=screen_id(ids), order=1, mode=ScreenMode.scroll, elements=[])],
    )


def template_base(name: str, elements: list[Element], ids: IdGenerator | None = None) -> Letter:
    """One white scrolling screen holding ``elements``, finished with "Done"."""
    ids = ids or RandomIds()
    return Letter(
        id=letter_id(ids),
        title=name,
        language="en",
        screens=[
            Screen(
                id=screen_id(ids),
                order=1,
                mode=ScreenMode.scroll,
                elements=elements,
                style=ScreenStyle(background="#ffffff", element_spacing=12),
                nav_done_label="Done",
            )
        ],
    )


def element_from_question(
    item: QuestionBankItem, required: bool = False, ids: IdGenerator | None = None
) -> Element:
    """Map a question bank entry to the element that asks it."""
    ids = ids or RandomIds()
    base: dict[str, Any] = {"id": ids.new_id(), "content": item.text}
    options = [{"label": label} for label in item.options]

    if item.type == "rating":
        scale = item.scale
        props = {
            "max": scale.max if scale else 5,
            "showPrompt": True,
            "scaleType": "numbers",
            "required": required,
        }
        if scale and scale.min_label:
            props["minLabel"] = scale.min_label
        if scale and scale.max_label:
            props["maxLabel"] = scale.max_label
        return Element(**base, type=ElementType.rating, props=props)
    if item.type in ("single_choice", "multiple_choice", "ranking"):
        el_type = {
            "single_choice": ElementType.single_choice,
            "multiple_choice": ElementType.multiple_choice,
            "ranking": ElementType.ranking,
        }[item.type]
        return Element(
            **base,
            type=el_type,
            props={"options": options, "optionFormat": "text", "showPrompt": True, "required": required},
        )
    if item.type == "date_input":
        return Element(
            **base,
            type=ElementType.date,
            props={"required": required, "mode": "date", "placeholder": "Select date", "showPrompt": True},
        )
    if item.type == "file_upload":
        return Element(
            **base,
            type=ElementType.file,
            props={
                "required": required,
                "maxSizeMb": 10,
                "showPrompt": True,
                "accept": "any",
                "customAccept": [],
            },
        )
    return Element(**base, type=ElementType.input, props={"required": required, "showPrompt": True})


@lru_cache(maxsize=1)
def _load_catalog(data_dir: Path = DATA_DIR) -> tuple[dict[str, QuestionBankItem], dict[str, str], list[QuestionnaireTemplate]]:
    bank_raw = yaml.safe_load((data_dir / "question_bank.yaml").read_text(encoding="utf-8")) or {}
    templates_raw = yaml.safe_load((data_dir / "templates.yaml").read_text(encoding="utf-8")) or {}

    bank = {
        item.id: item
        for item in (QuestionBankItem.model_validate(q) for q in bank_raw.get("questions", []))
    }
    categories: dict[str, str] = bank_raw.get("categories", {})
    templates = [QuestionnaireTemplate.model_validate(t) for t in templates_raw.get("templates", [])]
    logger.debug("loaded %d questions and %d templates", len(bank), len(templates))
    return bank, categories, templates


def question_bank() -> dict[str, QuestionBankItem]:
    return _load_catalog()[0]


def library_templates(ids: IdGenerator | None = None) -> list[Template]:
    """Build every catalogue template into a letter.

    Template ids are stable across calls (derived from the catalogue id).
    Unknown question ids are skipped.
    """
    ids = ids or RandomIds()
    bank, categories, catalog = _load_catalog()
    result: list[Template] = []
    for tpl in catalog:
        elements = []
        for q in sorted(tpl.questions, key=lambda q: q.order):
            item = bank.get(q.question_id)
            if item is None:
                logger.warning("template %s references unknown question %s", tpl.id, q.question_id)
                continue
            elements.append(element_from_question(item, q.required, ids))
        result.append(
            Template(
                id=f"tpl-{tpl.id.lower().removeprefix('tpl_').replace('_', '-')}",
                name=tpl.name,
                source="library",
                category=" • ".join(categories.get(c, c) for c in tpl.categories),
                letter=template_base(tpl.name, elements, ids),
            )
        )
    return result


def seed_user_templates(ids: IdGenerator | None = None) -> list[Template]:
    ids = ids or RandomIds()
    elements = [
        Element(id=ids.new_id(), type=ElementType.header, content="Monthly update", style=ElementStyle(font_size=26)),
        Element(
            id=ids.new_id(),
            type=ElementType.paragraph,
            content="Highlights, news and upcoming events.",
            style=ElementStyle(font_size=16),
        ),
        Element(id=ids.new_id(), type=ElementType.image, content="", style=ElementStyle(height=240)),
        Element(
            id=ids.new_id(),
            type=ElementType.button,
            content="Read more",
            style=ElementStyle(width=260, height=56, align="center"),
        ),
    ]
    return [
        Template(
            id=f"tpl-{ids.new_id()}",
            name="Simple newsletter",
            source="user",
            category="Marketing",
            letter=template_base("Simple newsletter", elements, ids),
        )
    ]
