"""
Happy Thoughts API — Thought Document Model
=============================================

What:  Shape and rules of a Thought document in the `thoughts` collection.
Why:   MongoDB is schemaless, so the field rules live here instead of in the
       database: every write path goes through `validate_message`.
Who:   Used by ThoughtStore for every insert and id lookup.

Document layout:
    {
        "_id":       ObjectId,   assigned on insert, immutable
        "message":   str,        5..140 characters, immutable
        "hearts":    int,        starts at 0, only ever incremented
        "createdAt": datetime,   UTC, set on insert, immutable
    }

Indexes:
    hearts DESC and createdAt DESC back the two sort orders of GET /thoughts.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId

from happy_thoughts.exceptions import InvalidIdError, ValidationError

COLLECTION_NAME = "thoughts"

MESSAGE_MIN_LENGTH = 5
MESSAGE_MAX_LENGTH = 140


class ThoughtSort(str, Enum):
    """Sort orders accepted by the `sort` query parameter of GET /thoughts."""

    NONE = "none"
    HEARTS = "hearts"
    DATE = "date"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ThoughtSort":
        """Unknown or missing values mean "no sort" rather than an error."""
        if value in (cls.HEARTS.value, cls.DATE.value):
            return cls(value)
        return cls.NONE

    @property
    def sort_spec(self) -> Optional[list]:
        """pymongo sort specification, or None for the store's natural order."""
        if self is ThoughtSort.HEARTS:
            return [("hearts", -1)]
        if self is ThoughtSort.DATE:
            return [("createdAt", -1)]
        return None


def validate_message(message: Any) -> str:
    """
    Check a candidate message against the Thought rules.

    Returns the message unchanged when it is valid.

    Raises:
        ValidationError: with `constraint` set to one of
            required   (missing, None, or empty string)
            type       (not a string)
            too_short  (fewer than 5 characters)
            too_long   (more than 140 characters)
    """
    limits = {"min_length": MESSAGE_MIN_LENGTH, "max_length": MESSAGE_MAX_LENGTH}

    if message is None or message == "":
        raise ValidationError(
            message="Message is required",
            field="message",
            constraint="required",
            context=limits,
        )
    if not isinstance(message, str):
        raise ValidationError(
            message="Message must be a string",
            field="message",
            constraint="type",
            context=limits,
        )

    length = len(message)
    if length < MESSAGE_MIN_LENGTH:
        raise ValidationError(
            message=f"Message must be at least {MESSAGE_MIN_LENGTH} characters long",
            field="message",
            constraint="too_short",
            context={**limits, "length": length},
        )
    if length > MESSAGE_MAX_LENGTH:
        raise ValidationError(
            message=f"Message must be at most {MESSAGE_MAX_LENGTH} characters long",
            field="message",
            constraint="too_long",
            context={**limits, "length": length},
        )
    return message


def parse_object_id(value: Any) -> ObjectId:
    """
    Convert a path id into an ObjectId.

    Raises InvalidIdError for anything that is not a 24-character hex string
    (or an ObjectId already), so malformed ids never reach the driver.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdError(value=str(value))
    return ObjectId(value)


def new_thought_document(
    message: Any,
    hearts: int = 0,
    created_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build a validated document ready for insertion (no `_id` yet).

    `hearts` and `created_at` are only overridden by the seed loader.
    """
    if not isinstance(hearts, int) or isinstance(hearts, bool) or hearts < 0:
        raise ValidationError(
            message="Hearts must be a non-negative integer",
            field="hearts",
            constraint="type",
        )
    if created_at is not None and not isinstance(created_at, datetime):
        raise ValidationError(
            message="createdAt must be a datetime",
            field="createdAt",
            constraint="type",
        )
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return {
        "message": validate_message(message),
        "hearts": hearts,
        "createdAt": created_at or datetime.now(timezone.utc),
    }


def seed_documents(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Build validated documents for seed records; raises on the first bad record."""
    return [
        new_thought_document(
            record.get("message"),
            hearts=record.get("hearts", 0),
            created_at=record.get("createdAt"),
        )
        for record in records
    ]


INDEXES = [
    ([("hearts", -1)], "idx_thoughts_hearts"),
    ([("createdAt", -1)], "idx_thoughts_created_at"),
]
