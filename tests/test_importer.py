"""Tests for questionnaire parsing and the import service."""

import base64
from unittest.mock import MagicMock

import pytest

from eletters.config.models import ImporterConfig
from eletters.converter import ConversionResult, DocumentConverter
from eletters.document.ids import SequentialIds
from eletters.document.models import ElementType, ScreenMode
from eletters.importer import ImportService, build_letter, detect_kind, draft_name_for, parse_questionnaire

QUESTIONNAIRE = """\
# Event feedback

Thanks for joining us. Please answer a few questions.

1. How did you hear about the event?
- Email
- Social media
- A friend

2. Which sessions did you attend? (select all that apply)
- [ ] Keynote
- [x] Workshop
- [ ] Panel

3. Please rank the topics by interest
a) Design
b) Engineering

4. On a scale of 1-10, how would you rate the venue?
What date would suit you for the next event?
Could you upload a photo from the day?
5. Any other comments?*

Page 2 of 2
"""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseQuestionnaire:
    def test_title_and_intro(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        assert parsed.title == "Event feedback"
        assert parsed.intro == "Thanks for joining us. Please answer a few questions."

    def test_questions_and_kinds(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        kinds = [q.kind for q in parsed.questions]
        assert kinds == [
            "single_choice",
            "multiple_choice",
            "ranking",
            "rating",
            "date_input",
            "file_upload",
            "text_input",
        ]

    def test_options_collected(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        assert parsed.questions[0].options == ["Email", "Social media", "A friend"]
        assert parsed.questions[1].options == ["Keynote", "Workshop", "Panel"]
        assert parsed.questions[2].options == ["Design", "Engineering"]

    def test_skipped_lines_counted(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        assert parsed.skipped == 1

    def test_heading_question(self):
        parsed = parse_questionnaire("## Would you come again?\n- Yes\n- No")
        assert parsed.title is None
        assert parsed.questions[0].text == "Would you come again?"
        assert parsed.questions[0].kind == "single_choice"

    def test_bold_markup_removed(self):
        parsed = parse_questionnaire("1. **Your name**")
        assert parsed.questions[0].text == "Your name"

    def test_empty(self):
        parsed = parse_questionnaire("")
        assert parsed.questions == []
        assert parsed.title is None


class TestDetectKind:
    @pytest.mark.parametrize(
        "text,has_options,expected",
        [
            ("Check all that apply", True, "multiple_choice"),
            ("Rank your favourites", True, "ranking"),
            ("Rate us", False, "rating"),
            ("Birth date", False, "date_input"),
            ("Attach your CV", False, "file_upload"),
            ("Pick one", True, "single_choice"),
            ("Your name", False, "text_input"),
        ],
    )
    def test_kinds(self, text, has_options, expected):
        assert detect_kind(text, has_options) == expected

    def test_choice_kinds_need_options(self):
        assert detect_kind("Select all that apply", False) == "text_input"
        assert detect_kind("Rank these", False) == "text_input"


class TestBuildLetter:
    def test_structure(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        letter = build_letter(parsed, "fallback", SequentialIds())
        screen = letter.screens[0]

        assert letter.title == "Event feedback"
        assert screen.mode == ScreenMode.scroll
        assert screen.nav_done_label == "Done"
        assert screen.elements[0].type == ElementType.header
        assert screen.elements[1].type == ElementType.paragraph
        assert screen.elements[-1].content == "Submit"
        assert len(screen.elements) == 2 + 7 + 1

    def test_element_mapping(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        letter = build_letter(parsed, "fallback", SequentialIds())
        by_text = {el.content: el for el in letter.screens[0].elements}

        rating = by_text["On a scale of 1-10, how would you rate the venue?"]
        assert rating.type == ElementType.rating
        assert rating.props["max"] == 10
        assert rating.props["scaleType"] == "numbers"

        date = by_text["What date would suit you for the next event?"]
        assert date.type == ElementType.date
        assert date.props["mode"] == "date"

        choice = by_text["How did you hear about the event?"]
        assert choice.props["options"][0] == {"label": "Email"}

    def test_required_marker(self):
        parsed = parse_questionnaire(QUESTIONNAIRE)
        letter = build_letter(parsed, "fallback", SequentialIds())
        last = letter.screens[0].elements[-2]
        assert last.content == "Any other comments?"
        assert last.props["required"] is True

    def test_unmarked_question_optional(self):
        parsed = parse_questionnaire("1. Your name?\n2. Your email?*")
        elements = build_letter(parsed, "signup", SequentialIds()).screens[0].elements
        assert [(el.content, el.props["required"]) for el in elements[1:3]] == [
            ("Your name?", False),
            ("Your email?", True),
        ]

    def test_file_upload_element(self):
        parsed = parse_questionnaire("1. Please upload your receipt")
        letter = build_letter(parsed, "Receipts", SequentialIds())
        element = letter.screens[0].elements[1]
        assert element.type == ElementType.file
        assert element.props["maxSizeMb"] == 10

    def test_fallback_title(self):
        parsed = parse_questionnaire("1. Name?")
        assert build_letter(parsed, "signup", SequentialIds()).title == "signup"


# ---------------------------------------------------------------------------
# Import service
# ---------------------------------------------------------------------------


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


class TestImportService:
    def test_text_import(self):
        service = ImportService(ids=SequentialIds())
        result = service.import_payload("event.md", "text/markdown", _b64(QUESTIONNAIRE))

        assert result.error is None
        assert result.draft_json["title"] == "Event feedback"
        assert result.notes[0].startswith("Detected 7 question(s): ")
        assert any("Skipped 1 line(s)" in n for n in result.notes)

    def test_data_url_prefix_accepted(self):
        service = ImportService(ids=SequentialIds())
        data = "data:text/plain;base64," + _b64("1. Name?")
        result = service.import_payload("form.txt", "text/plain", data)
        assert result.draft_json is not None

    def test_invalid_base64(self):
        result = ImportService().import_payload("a.txt", "text/plain", "!!!not base64!!!")
        assert result.error == "Invalid file data: expected base64"

    def test_empty_file(self):
        result = ImportService().import_bytes("a.txt", "text/plain", b"")
        assert result.error == "The uploaded file is empty"

    def test_too_large(self):
        service = ImportService(ImporterConfig(max_file_size_mb=1))
        result = service.import_bytes("a.txt", "text/plain", b"x" * (1024 * 1024 + 1))
        assert result.error == "File too large (max 1 MB)"

    def test_unsupported_type(self):
        result = ImportService().import_bytes("sheet.xlsx", "application/vnd.ms-excel", b"data")
        assert result.error.startswith("Unsupported file type. Use PDF, DOCX")

    def test_type_from_mime_when_no_extension(self):
        result = ImportService(ids=SequentialIds()).import_bytes("upload", "text/plain", b"1. Name?")
        assert result.error is None
        assert result.draft_json["title"] == "upload"

    def test_unreadable_document(self):
        converter = MagicMock(spec=DocumentConverter)
        converter.convert_bytes.return_value = None
        result = ImportService(converter=converter).import_bytes("scan.pdf", "application/pdf", b"%PDF")
        assert result.error is None
        assert result.draft_json is None
        assert result.warning.startswith("Could not read the document")

    def test_pdf_goes_through_converter(self):
        converter = MagicMock(spec=DocumentConverter)
        converter.convert_bytes.return_value = ConversionResult(
            source_name="form.pdf", markdown="1. Your name?", format="pdf"
        )
        result = ImportService(converter=converter, ids=SequentialIds()).import_bytes(
            "form.pdf", "application/pdf", b"%PDF-1.7"
        )
        converter.convert_bytes.assert_called_once_with(b"%PDF-1.7", "form.pdf")
        assert result.draft_json["title"] == "form"

    def test_no_questions(self):
        result = ImportService().import_bytes("notes.txt", "text/plain", b"Just some notes\nnothing else")
        assert result.draft_json is None
        assert result.warning.startswith("No questions detected")
        assert result.notes == ["Skipped 1 line(s) that did not look like questions."]

    def test_per_question_layout(self):
        service = ImportService(ImporterConfig(layout="per-question"), ids=SequentialIds())
        result = service.import_payload("event.md", "text/markdown", _b64(QUESTIONNAIRE))
        screens = result.draft_json["screens"]
        assert len(screens) == 7
        assert all(s["mode"] == "single-screen" for s in screens)
        assert all(len(s["elements"]) == 1 for s in screens)
        assert screens[-1]["navDoneLabel"] == "Done"
        assert "Split into one question per screen." in result.notes

    def test_wire_format(self):
        result = ImportService(ids=SequentialIds()).import_bytes("a.txt", "text/plain", b"1. Name?")
        wire = result.to_wire()
        assert "draftJson" in wire
        assert "error" not in wire


class TestDraftName:
    def test_strips_extension(self):
        assert draft_name_for("Customer survey.docx") == "Customer survey"

    def test_fallback(self):
        assert draft_name_for(".pdf") == "Imported questionnaire"
