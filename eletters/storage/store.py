"""Draft and template persistence.

``JsonDraftStore`` keeps everything in a single JSON document on disk. The
library templates are rebuilt from the bundled catalogue every time the
store is opened; user templates and drafts are preserved.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from eletters.document.clone import reassign_ids
from eletters.document.ids import IdGenerator, RandomIds
from eletters.document.models import Letter
from eletters.storage.models import EletterDraft, EletterStatus, Template
from eletters.storage.seed import create_blank_letter, library_templates, seed_user_templates

logger = logging.getLogger(__name__)

DEFAULT_DRAFT_NAME = "No title"
DEFAULT_PUBLISHER = "You"
USER_TEMPLATE_CATEGORY = "Your template"


class DraftNotFoundError(LookupError):
    """No draft or template with the requested id."""


@runtime_checkable
class DraftStorage(Protocol):
    def create_draft(
        self,
        name: str | None = None,
        status: EletterStatus = EletterStatus.draft,
        letter: Letter | None = None,
    ) -> EletterDraft: ...
    def list_drafts(self) -> list[EletterDraft]: ...
    def get_draft(self, draft_id: str) -> EletterDraft: ...
    def update_draft_json(self, draft_id: str, letter: Letter) -> EletterDraft: ...
    def rename_draft(self, draft_id: str, name: str) -> EletterDraft: ...
    def copy_draft(self, draft_id: str) -> EletterDraft: ...
    def delete_draft(self, draft_id: str) -> None: ...
    def publish_draft(self, draft_id: str, status: EletterStatus = EletterStatus.sent) -> EletterDraft: ...
    def list_templates(self) -> list[Template]: ...
    def add_user_template(self, name: str, letter: Letter) -> Template: ...
    def create_draft_from_template(self, template_id: str) -> EletterDraft: ...
    def delete_template(self, template_id: str) -> None: ...


class _StoreFile(BaseModel):
    version: int = 1
    drafts: list[EletterDraft] = Field(default_factory=list)
    templates: list[Template] = Field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JsonDraftStore:
    """File-backed ``DraftStorage``."""

    def __init__(
        self,
        path: str | Path,
        ids: IdGenerator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = Path(path)
        self.ids = ids or RandomIds()
        self._clock = clock
        self._refresh_library()

    # -- drafts ------------------------------------------------------------

    def create_draft(
        self,
        name: str | None = None,
        status: EletterStatus = EletterStatus.draft,
        letter: Letter | None = None,
    ) -> EletterDraft:
        now = self._clock()
        published = status != EletterStatus.draft
        draft = EletterDraft(
            id=self.ids.new_id(),
            name=name or DEFAULT_DRAFT_NAME,
            status=status,
            created_at=now,
            updated_at=now,
            published_at=now if published else None,
            published_by=DEFAULT_PUBLISHER if published else None,
            letter=letter or create_blank_letter(self.ids),
        )
        data = self._load()
        data.drafts.append(draft)
        self._save(data)
        logger.info("created draft %s (%s)", draft.id, draft.name)
        return draft

    def list_drafts(self) -> list[EletterDraft]:
        """Most recently updated first."""
        return sorted(self._load().drafts, key=lambda d: d.updated_at, reverse=True)

    def get_draft(self, draft_id: str) -> EletterDraft:
        for draft in self._load().drafts:
            if draft.id == draft_id:
                return draft
        raise DraftNotFoundError(f"No draft with id {draft_id!r}")

    def update_draft_json(self, draft_id: str, letter: Letter) -> EletterDraft:
        return self._update(draft_id, letter=letter)

    def rename_draft(self, draft_id: str, name: str) -> EletterDraft:
        """Rename the draft and retitle its letter to match."""
        current = self.get_draft(draft_id)
        letter = current.letter.model_copy(update={"title": name})
        return self._update(draft_id, name=name, letter=letter)

    def copy_draft(self, draft_id: str) -> EletterDraft:
        source = self.get_draft(draft_id)
        return self.create_draft(
            name=f"{source.name} (copy)",
            letter=reassign_ids(source.letter, self.ids),
        )

    def delete_draft(self, draft_id: str) -> None:
        data = self._load()
        remaining = [d for d in data.drafts if d.id != draft_id]
        if len(remaining) == len(data.drafts):
            raise DraftNotFoundError(f"No draft with id {draft_id!r}")
        data.drafts = remaining
        self._save(data)
        logger.info("deleted draft %s", draft_id)

    def publish_draft(self, draft_id: str, status: EletterStatus = EletterStatus.sent) -> EletterDraft:
        """Mark a draft as sent or running. Letters without screens are rejected."""
        if status == EletterStatus.draft:
            raise ValueError("Cannot publish with status 'Draft'")
        draft = self.get_draft(draft_id)
        if not draft.letter.screens:
            raise ValueError(f"Draft {draft_id!r} has no screens to publish")
        now = self._clock()
        return self._update(draft_id, status=status, published_at=now, published_by=DEFAULT_PUBLISHER)

    # -- templates ---------------------------------------------------------

    def list_templates(self) -> list[Template]:
        """Sorted by name."""
        return sorted(self._load().templates, key=lambda t: t.name.casefold())

    def get_template(self, template_id: str) -> Template:
        for template in self._load().templates:
            if template.id == template_id:
                return template
        raise DraftNotFoundError(f"No template with id {template_id!r}")

    def add_user_template(self, name: str, letter: Letter) -> Template:
        template = Template(
            id=f"tpl-{self.ids.new_id()}",
            name=name,
            source="user",
            category=USER_TEMPLATE_CATEGORY,
            letter=letter,
        )
        data = self._load()
        data.templates.append(template)
        self._save(data)
        return template

    def create_draft_from_template(self, template_id: str) -> EletterDraft:
        """New draft holding a fresh-id copy of the template's letter."""
        template = self.get_template(template_id)
        return self.create_draft(name=template.name, letter=reassign_ids(template.letter, self.ids))

    def delete_template(self, template_id: str) -> None:
        """Delete a user template. Library templates cannot be deleted."""
        template = self.get_template(template_id)
        if template.source == "library":
            raise ValueError(f"Template {template_id!r} is a library template")
        data = self._load()
        data.templates = [t for t in data.templates if t.id != template_id]
        self._save(data)

    # -- file handling -----------------------------------------------------

    def _update(self, draft_id: str, **changes: Any) -> EletterDraft:
        data = self._load()
        for idx, draft in enumerate(data.drafts):
            if draft.id == draft_id:
                updated = draft.model_copy(update={**changes, "updated_at": self._clock()})
                data.drafts[idx] = updated
                self._save(data)
                return updated
        raise DraftNotFoundError(f"No draft with id {draft_id!r}")

    def _refresh_library(self) -> None:
        data = self._load()
        user = [t for t in data.templates if t.source == "user"]
        if not self.path.exists():
            user = seed_user_templates(self.ids)
        data.templates = user + library_templates(self.ids)
        self._save(data)

    def _load(self) -> _StoreFile:
        if not self.path.exists():
            return _StoreFile()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return _StoreFile.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"Invalid store file {self.path}: {e}") from e

    def _save(self, data: _StoreFile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = data.model_dump(mode="json", by_alias=True, exclude_none=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("saved %s (%d drafts)", self.path, len(data.drafts))
