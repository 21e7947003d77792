"""
AI Service.

Summaries and tag suggestions for a note, produced by the hosted
text-generation API. The client is passed in (built by the application
lifespan); when it is missing or AI features are switched off, every
operation fails with an external-service error instead of calling out.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.notebook.core.config_schema import AiSchema, SearchSchema
from modules.notebook.core.exceptions import ExternalServiceError, ValidationError
from modules.notebook.core.result import Result
from modules.notebook.core.text import normalize_tags, truncate_to_token_limit
from modules.notebook.core.text_generation import TextGenerator
from modules.notebook.models.note import Note
from modules.notebook.models.summary import Summary
from modules.notebook.repositories.note import NoteRepository
from modules.notebook.repositories.summary import SummaryRepository
from modules.notebook.repositories.tag import TagRepository
from modules.notebook.services.base import BaseService
from modules.notebook.services.prompts import parse_tags, summary_prompt, tags_prompt


class AiService(BaseService):
    """Service for AI-generated summaries and tags."""

    def __init__(
        self,
        session: AsyncSession,
        client: TextGenerator | None,
        config: AiSchema,
        search_config: SearchSchema | None = None,
        enabled: bool = True,
    ) -> None:
        super().__init__(session)
        self.client = client
        self.config = config
        self.search_config = search_config or SearchSchema()
        self.enabled = enabled
        self.notes = NoteRepository(session)
        self.summaries = SummaryRepository(session)
        self.tags = TagRepository(session)

    async def generate_note_summary(self, owner_id: str | None, note_id: str) -> Result[Summary]:
        """
        Summarize an active note and store the summary.

        Long content is cut down to the summary token budget first.
        """
        return await self._run(
            "generate_note_summary",
            self._generate_note_summary(owner_id, note_id),
            failure_message="Failed to generate summary",
            note_id=note_id,
        )

    async def _generate_note_summary(self, owner_id: str | None, note_id: str) -> Summary:
        owner = self._require_owner(owner_id)
        note = await self._load_content(owner, note_id)
        client = self._require_client()

        content = truncate_to_token_limit(note.content, self.config.summary_token_limit)
        text = await client.generate(summary_prompt(content))

        self._log_operation("Storing note summary", note_id=note_id, model=client.model)
        return await self._execute_db_operation(
            "create_summary",
            self.summaries.create(note_id=note.id, content=text, model=client.model),
        )

    async def get_note_summary(self, owner_id: str | None, note_id: str) -> Result[Summary | None]:
        """Most recent summary of an active note, or None."""
        return await self._run(
            "get_note_summary",
            self._get_note_summary(owner_id, note_id),
            failure_message="Failed to load summary",
            note_id=note_id,
        )

    async def _get_note_summary(self, owner_id: str | None, note_id: str) -> Summary | None:
        owner = self._require_owner(owner_id)
        note = await self.notes.get_owned(owner, note_id)
        return await self.summaries.latest(note.id)

    async def generate_note_tags(self, owner_id: str | None, note_id: str) -> Result[list[str]]:
        """
        Ask for tags describing a note and replace the note's tags with them.

        Returns the normalized tags that were stored.
        """
        return await self._run(
            "generate_note_tags",
            self._generate_note_tags(owner_id, note_id),
            failure_message="Failed to generate tags",
            note_id=note_id,
        )

    async def _generate_note_tags(self, owner_id: str | None, note_id: str) -> list[str]:
        owner = self._require_owner(owner_id)
        note = await self._load_content(owner, note_id)
        client = self._require_client()

        content = truncate_to_token_limit(note.content, self.config.token_limit)
        max_tags = self.config.max_generated_tags
        answer = await client.generate(tags_prompt(content, max_tags))

        tags = normalize_tags(
            parse_tags(answer, max_tags),
            max_length=self.search_config.tags.max_length,
            max_count=self.search_config.tags.max_per_batch,
        )
        self._log_operation("Replacing note tags", note_id=note_id, tags=tags)
        return await self._execute_db_operation("replace_tags", self.tags.replace(note.id, tags))

    async def _load_content(self, owner: str, note_id: str) -> Note:
        note = await self.notes.get_owned(owner, note_id)
        if not note.content or not note.content.strip():
            raise ValidationError("Note content is empty", details={"content": "empty"})
        return note

    def _require_client(self) -> TextGenerator:
        if not self.enabled or self.client is None:
            raise ExternalServiceError("Text generation is not available")
        return self.client
