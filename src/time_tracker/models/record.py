"""Activity log record model.

A record is one logged activity: a label, the instant it was logged and
the comments added to it afterwards. Records are treated as values; the
helpers below return new records instead of mutating their input.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from time_tracker.config.paths import COMMENT_SEPARATOR
from time_tracker.exceptions import InvalidActivity


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision from a datetime."""
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    """Current instant in UTC at millisecond precision."""
    return truncate_to_millis(datetime.now(UTC))


def format_iso_timestamp(value: datetime) -> str:
    """Format as ISO-8601 UTC with milliseconds, e.g. ``2025-04-09T15:00:00.000Z``."""
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class LogRecord(BaseModel):
    """A single activity log entry.

    Field order is the serialization order: activity, timestamp, comments.
    """

    model_config = ConfigDict(extra="ignore")

    activity: str = Field(min_length=1, description="What was done")
    timestamp: datetime = Field(description="Instant the activity was logged (UTC)")
    comments: list[str] = Field(
        default_factory=list,
        description="Free-text comments in the order they were added",
    )

    @field_validator("activity")
    @classmethod
    def _activity_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("activity cannot be blank")
        return value

    @field_validator("timestamp")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        # Naive values come from hand-edited files; treat them as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_validator("comments", mode="before")
    @classmethod
    def _missing_comments(cls, value: object) -> object:
        return [] if value is None else value

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_iso_timestamp(value)

    def to_dict(self) -> dict:
        """Plain JSON-ready dictionary in interchange field order."""
        return self.model_dump(mode="json")


def create_record(activity: str, now: datetime) -> LogRecord:
    """Create a record for ``activity`` logged at ``now`` with no comments.

    Raises:
        InvalidActivity: If the label is empty after trimming.
    """
    label = (activity or "").strip()
    if not label:
        raise InvalidActivity(activity)
    return LogRecord(activity=label, timestamp=truncate_to_millis(now), comments=[])


def append_comment(record: LogRecord, text: str) -> LogRecord:
    """Return a copy of ``record`` with ``text`` appended to its comments.

    Empty text is kept as-is.
    """
    return record.model_copy(update={"comments": [*record.comments, text]})


def split_comments(raw: str) -> list[str]:
    """Split comma separated comment text, trimming pieces and dropping empty ones."""
    return [piece.strip() for piece in (raw or "").split(COMMENT_SEPARATOR) if piece.strip()]


def edit_record(
    record: LogRecord, new_activity: str, new_comments_raw: str | None = None
) -> LogRecord:
    """Replace activity and comments of ``record``; the timestamp is kept.

    Comment text is a full replace, not a merge: existing comments are
    discarded. ``None`` leaves the stored comment list exactly as it is.

    Raises:
        InvalidActivity: If ``new_activity`` is empty after trimming.
    """
    label = (new_activity or "").strip()
    if not label:
        raise InvalidActivity(new_activity)
    if new_comments_raw is None:
        comments = list(record.comments)
    else:
        comments = split_comments(new_comments_raw)
    return record.model_copy(update={"activity": label, "comments": comments})


def format_display_timestamp(record: LogRecord) -> str:
    """Timestamp as shown in the log list: ``YYYY-MM-DD HH:MM:SS`` (UTC)."""
    return record.timestamp.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S")
