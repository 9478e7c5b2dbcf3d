"""Tests for the conversational draft session."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from eletters.client import RemoteDraftClient
from eletters.document.ids import SequentialIds
from eletters.document.models import ScreenMode
from eletters.drafter import DraftSession
from eletters.drafter.models import RemoteFailure, RemoteSuccess
from eletters.drafter.session import FAILURE_MESSAGE, OFFLINE_WARNING


def _client(result):
    client = MagicMock(spec=RemoteDraftClient)
    client.draft = AsyncMock(return_value=result)
    return client


class TestSubmitOffline:
    @pytest.mark.asyncio
    async def test_blank_prompt_ignored(self):
        session = DraftSession(ids=SequentialIds())
        assert await session.submit("  ") is None
        assert session.messages == []
        assert session.draft is None

    @pytest.mark.asyncio
    async def test_local_draft_with_offline_warning(self):
        session = DraftSession(ids=SequentialIds())
        reply = await session.submit("Create a quick employee pulse about workload")

        assert session.draft.title == "Employee Pulse Survey"
        assert OFFLINE_WARNING in reply
        assert "(source: local logic)" in reply
        assert [m.role for m in session.messages] == ["user", "assistant"]
        assert session.messages[1].text == reply

    @pytest.mark.asyncio
    async def test_second_prompt_edits_and_prefixes(self):
        session = DraftSession(ids=SequentialIds())
        await session.submit("employee pulse")
        reply = await session.submit("add a question about parking")

        assert reply.startswith("Updated draft. ")
        contents = [el.content for el in session.draft.iter_elements()]
        assert "Any feedback about parking?" in contents
        assert len(session.messages) == 4


class TestSubmitRemote:
    @pytest.mark.asyncio
    async def test_remote_success_used(self, survey_letter):
        client = _client(RemoteSuccess(letter=survey_letter, source="remote-primary"))
        session = DraftSession(client, ids=SequentialIds())
        reply = await session.submit("coffee survey")

        assert session.draft == survey_letter
        assert "(source: Gemini)" in reply
        assert OFFLINE_WARNING not in reply
        client.draft.assert_awaited_once_with("coffee survey", None)

    @pytest.mark.asyncio
    async def test_remote_warning_carried(self, survey_letter):
        client = _client(
            RemoteSuccess(letter=survey_letter, source="heuristic", warning="Gemini unavailable: quota")
        )
        session = DraftSession(client, ids=SequentialIds())
        reply = await session.submit("coffee survey")
        assert "Gemini unavailable: quota" in reply

    @pytest.mark.asyncio
    async def test_current_draft_sent_to_remote(self, survey_letter):
        client = _client(RemoteSuccess(letter=survey_letter, source="remote-secondary"))
        session = DraftSession(client, ids=SequentialIds())
        session.draft = survey_letter
        await session.submit("shorter please")
        client.draft.assert_awaited_once_with("shorter please", survey_letter)

    @pytest.mark.asyncio
    async def test_remote_failure_falls_back(self):
        client = _client(RemoteFailure(reason="HTTP 502"))
        session = DraftSession(client, ids=SequentialIds())
        reply = await session.submit("customer feedback")
        assert session.draft.title == "Customer Feedback Survey"
        assert OFFLINE_WARNING in reply

    @pytest.mark.asyncio
    async def test_orchestration_failure_clears_draft(self, survey_letter):
        client = MagicMock(spec=RemoteDraftClient)
        client.draft = AsyncMock(side_effect=RuntimeError("boom"))
        session = DraftSession(client, ids=SequentialIds())
        session.draft = survey_letter

        reply = await session.submit("anything")

        assert reply == FAILURE_MESSAGE
        assert session.last_error == FAILURE_MESSAGE
        assert session.draft is None
        assert session.messages[-1].role == "assistant"
        assert session.messages[-1].text == FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_error_cleared_on_next_success(self):
        client = MagicMock(spec=RemoteDraftClient)
        client.draft = AsyncMock(side_effect=[RuntimeError("boom"), RemoteFailure(reason="down")])
        session = DraftSession(client, ids=SequentialIds())
        await session.submit("first")
        await session.submit("second")
        assert session.last_error is None
        assert session.draft is not None


class TestPreview:
    @pytest.mark.asyncio
    async def test_preview_none_without_draft(self):
        assert DraftSession().preview() is None
        assert DraftSession().apply() is None

    @pytest.mark.asyncio
    async def test_preview_follows_layout(self, survey_letter):
        session = DraftSession(ids=SequentialIds())
        session.draft = survey_letter

        assert len(session.preview().screens) == 1
        session.set_layout("per-question")
        preview = session.preview()
        assert len(preview.screens) == 5
        assert all(s.mode == ScreenMode.single_screen for s in preview.screens)
        assert session.apply() == preview
        # the held draft is not reflowed
        assert len(session.draft.screens) == 1
