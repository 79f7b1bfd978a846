from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from gitlab_client._resource_base import BaseModelObject

from .dynamic_enum import DynamicEnum


class EventAction(str, Enum):
    """Values of the action_name field of an event."""

    ACCEPTED = "accepted"
    APPROVED = "approved"
    CLOSED = "closed"
    COMMENTED_ON = "commented on"
    CREATED = "created"
    DELETED = "deleted"
    DESTROYED = "destroyed"
    EXPIRED = "expired"
    IMPORTED = "imported"
    JOINED = "joined"
    LEFT = "left"
    MERGED = "merged"
    OPENED = "opened"
    PUSHED_NEW = "pushed new"
    PUSHED_TO = "pushed to"
    REOPENED = "reopened"
    UPDATED = "updated"


class EventTargetType(str, Enum):
    """Values of the target_type field of an event."""

    DESIGN = "DesignManagement::Design"
    DIFF_NOTE = "DiffNote"
    DISCUSSION_NOTE = "DiscussionNote"
    ISSUE = "Issue"
    MERGE_REQUEST = "MergeRequest"
    MILESTONE = "Milestone"
    NOTE = "Note"
    PROJECT = "Project"
    SNIPPET = "Snippet"
    USER = "User"
    WIKI_PAGE = "WikiPage::Meta"


class Note(BaseModelObject):
    id: int
    body: str | None = None
    author_id: int | None = None
    created_at: datetime | None = None
    system: bool | None = None
    noteable_id: int | None = None
    noteable_type: str | None = None
    noteable_iid: int | None = None


class PushData(BaseModelObject):
    commit_count: int | None = None
    action: str | None = None
    ref_type: str | None = None
    commit_from: str | None = None
    commit_to: str | None = None
    ref: str | None = None
    commit_title: str | None = None
    ref_count: int | None = None


class Event(BaseModelObject):
    """Events are user activity such as commenting a merge request."""

    id: int | None = None
    title: str | None = None
    project_id: int | None = None
    action: DynamicEnum[EventAction] | None = Field(None, alias="action_name")
    target_id: int | None = None
    target_iid: int | None = None
    target_type: DynamicEnum[EventTargetType] | None = None
    target_title: str | None = None
    author_id: int | None = None
    author_username: str | None = None
    created_at: datetime | None = None
    note: Note | None = None
    push_data: PushData | None = None

    def __str__(self) -> str:
        # Debug display, e.g. "jdoe pushed to  2.5 days ago"
        age = _format_age(self.created_at) if self.created_at else ""
        return f"{self.author_username or ''} {self.action or ''} {self.target_type or ''} {age}"


def _format_age(created_at: datetime, now: datetime | None = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc) if created_at.tzinfo else datetime.now()
    age = now - created_at
    days = age.total_seconds() / 86400
    if days > 1:
        return f"{days:.1f} days ago"
    hours = age.total_seconds() / 3600
    if hours > 1:
        return f"{hours:.1f} hours ago"
    return f"{age.total_seconds() / 60:.1f} minutes ago"
