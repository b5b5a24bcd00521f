# =============================================================================
# core/services/note_service.py - Notes Business Logic
# =============================================================================
# Notes live in `notes` (tags stored as a text[] column) and the business's
# tag palette in `note_tags`. Both are scoped to one business profile.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import DatabaseOperationError, DuplicateRecordError, RecordNotFoundError
from lib.supabase_client import SupabaseClient, is_no_rows_error

logger = logging.getLogger(__name__)

TABLE = "notes"
TAGS_TABLE = "note_tags"
RESOURCE = "note"
TAG_RESOURCE = "note_tag"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class NoteService:
    """Service for notes and note tags, scoped to one business profile."""

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    @staticmethod
    def list_notes(
        business_profile_id: str,
        entity_type: str | None = None,
        entity_id: str | None = None,
        tag: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List notes, newest first.

        Args:
            entity_type: Only notes about this kind of record
            entity_id: Only notes about this record
            tag: Only notes carrying this tag
        """
        client = SupabaseClient.get_client()

        try:
            query = (
                client.table(TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
            )
            if entity_type:
                query = query.eq("entity_type", entity_type)
            if entity_id:
                query = query.eq("entity_id", entity_id)
            if tag:
                query = query.contains("tags", [tag])
            response = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list notes for {business_profile_id}: {e}")
            raise DatabaseOperationError("list notes", str(e))

        return response.data or []

    @staticmethod
    def list_by_entity(
        business_profile_id: str,
        entity_type: str,
        entity_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Notes about one kind of record, or one record when entity_id is given."""
        return NoteService.list_notes(
            business_profile_id, entity_type=entity_type, entity_id=entity_id
        )

    @staticmethod
    def list_by_tag(business_profile_id: str, tag: str) -> list[dict[str, Any]]:
        return NoteService.list_notes(business_profile_id, tag=tag)

    @staticmethod
    def get_note(business_profile_id: str, note_id: str) -> dict[str, Any]:
        """
        Get one note.

        Raises:
            RecordNotFoundError: If the note doesn't exist in this business
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("id", note_id)
                .eq("business_profile_id", business_profile_id)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                raise RecordNotFoundError(RESOURCE, note_id)
            logger.error(f"Failed to fetch note {note_id}: {e}")
            raise DatabaseOperationError("fetch note", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, note_id)
        return response.data

    @staticmethod
    def create_note(
        business_profile_id: str,
        user_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """Add a note written by `user_id`."""
        client = SupabaseClient.get_client()
        now = _now()
        record = {
            **data,
            "business_profile_id": business_profile_id,
            "created_by": user_id,
            "created_at": now,
            "updated_at": now,
        }

        try:
            response = client.table(TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to add note: {e}")
            raise DatabaseOperationError("add note", str(e))

        if not response.data:
            raise DatabaseOperationError("add note", "Insert returned no data")

        note = response.data[0]
        logger.info(f"Added note {note.get('id')} ({record.get('entity_type')}) to {business_profile_id}")
        return note

    @staticmethod
    def update_note(
        business_profile_id: str,
        note_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update a note. An empty update returns the note unchanged.

        Raises:
            RecordNotFoundError: If the note doesn't exist in this business
        """
        if not data:
            return NoteService.get_note(business_profile_id, note_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .update({**data, "updated_at": _now()})
                .eq("id", note_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update note {note_id}: {e}")
            raise DatabaseOperationError("update note", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, note_id)
        return response.data[0]

    @staticmethod
    def delete_note(business_profile_id: str, note_id: str) -> None:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .delete()
                .eq("id", note_id)
                .eq("business_profile_id", business_profile_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete note {note_id}: {e}")
            raise DatabaseOperationError("delete note", str(e))

        if not response.data:
            raise RecordNotFoundError(RESOURCE, note_id)
        logger.info(f"Deleted note {note_id}")

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    @staticmethod
    def list_tags(business_profile_id: str) -> list[dict[str, Any]]:
        """The business's tag palette, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TAGS_TABLE)
                .select("*")
                .eq("business_profile_id", business_profile_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list note tags for {business_profile_id}: {e}")
            raise DatabaseOperationError("list note tags", str(e))

        return response.data or []

    @staticmethod
    def create_tag(business_profile_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Add a tag to the palette.

        Raises:
            DuplicateRecordError: If a tag with the same name (any case) exists
        """
        name = data["name"]
        existing = NoteService.list_tags(business_profile_id)
        if any((tag.get("name") or "").lower() == name.lower() for tag in existing):
            raise DuplicateRecordError(TAG_RESOURCE, name)

        client = SupabaseClient.get_client()
        record = {**data, "business_profile_id": business_profile_id, "created_at": _now()}

        try:
            response = client.table(TAGS_TABLE).insert(record).execute()
        except Exception as e:
            logger.error(f"Failed to add note tag {name!r}: {e}")
            raise DatabaseOperationError("add note tag", str(e))

        if not response.data:
            raise DatabaseOperationError("add note tag", "Insert returned no data")

        logger.info(f"Added note tag {name!r} to {business_profile_id}")
        return response.data[0]
