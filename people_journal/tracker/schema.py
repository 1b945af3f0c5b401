"""
Field Schema - Runtime mapping from logical concepts to tracker field ids.

Every tracker tenant assigns its own custom field ids to "story points"
and "epic name". The mapping is derived from the /field metadata on each
call; `schema_from_metadata` is the pure half of that discovery.
"""
from dataclasses import dataclass
from typing import Any, List, Tuple

# Conventional ids used by tracker cloud tenants created from the default template
DEFAULT_STORY_POINT_FIELD = "customfield_10016"
DEFAULT_EPIC_NAME_FIELD = "customfield_10014"

STORY_POINT_LABELS = {"story points", "story point estimate"}
EPIC_NAME_LABELS = {"epic name"}


@dataclass(frozen=True)
class FieldSchema:
    """
    Tenant field ids for the concepts the aggregator needs.

    Attributes:
        story_point_fields: Candidate ids in metadata order; the first one
            holding a positive number on an issue wins
        epic_name_field: Id holding the epic name
    """
    story_point_fields: Tuple[str, ...] = (DEFAULT_STORY_POINT_FIELD,)
    epic_name_field: str = DEFAULT_EPIC_NAME_FIELD

    def search_fields(self) -> List[str]:
        """Field projection to request from issue search."""
        fields = ["summary", "status", "priority", "flagged", self.epic_name_field]
        for field_id in self.story_point_fields:
            if field_id not in fields:
                fields.append(field_id)
        return fields


DEFAULT_SCHEMA = FieldSchema()


def schema_from_metadata(metadata: Any) -> FieldSchema:
    """
    Build a FieldSchema from the tracker's field metadata list.

    Labels are matched case-insensitively and exactly. Concepts with no
    matching field keep their default id; anything that is not a list
    yields DEFAULT_SCHEMA.

    Example:
        >>> schema_from_metadata([
        ...     {"id": "cf_1", "name": "Story Points"},
        ...     {"id": "cf_2", "name": "Epic Name"},
        ... ])
        FieldSchema(story_point_fields=('cf_1',), epic_name_field='cf_2')
    """
    if not isinstance(metadata, list):
        return DEFAULT_SCHEMA

    story_points: List[str] = []
    epic_name = ""

    for item in metadata:
        if not isinstance(item, dict):
            continue
        field_id = item.get("id")
        name = item.get("name")
        if not isinstance(field_id, str) or not isinstance(name, str) or not field_id:
            continue

        label = name.lower()
        if label in STORY_POINT_LABELS and field_id not in story_points:
            story_points.append(field_id)
        elif label in EPIC_NAME_LABELS and not epic_name:
            epic_name = field_id

    return FieldSchema(
        story_point_fields=tuple(story_points) or DEFAULT_SCHEMA.story_point_fields,
        epic_name_field=epic_name or DEFAULT_SCHEMA.epic_name_field,
    )
