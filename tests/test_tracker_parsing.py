"""Tests for field schema discovery and issue decoding."""
from fakes import issue
from people_journal.models.tracker import TrackerTicket
from people_journal.tracker.parsing import extract_points, is_done, parse_issue
from people_journal.tracker.schema import (
    DEFAULT_EPIC_NAME_FIELD,
    DEFAULT_SCHEMA,
    DEFAULT_STORY_POINT_FIELD,
    FieldSchema,
    schema_from_metadata,
)


class TestSchemaFromMetadata:

    def test_matches_labels_case_insensitively(self):
        schema = schema_from_metadata([
            {"id": "summary", "name": "Summary"},
            {"id": "customfield_200", "name": "STORY POINTS"},
            {"id": "customfield_300", "name": "Epic Name"},
        ])
        assert schema.story_point_fields == ("customfield_200",)
        assert schema.epic_name_field == "customfield_300"

    def test_collects_every_story_point_field_in_order(self):
        schema = schema_from_metadata([
            {"id": "cf_b", "name": "Story point estimate"},
            {"id": "cf_a", "name": "Story Points"},
        ])
        assert schema.story_point_fields == ("cf_b", "cf_a")

    def test_missing_concepts_keep_defaults(self):
        schema = schema_from_metadata([{"id": "cf_9", "name": "Story Points"}])
        assert schema.story_point_fields == ("cf_9",)
        assert schema.epic_name_field == DEFAULT_EPIC_NAME_FIELD

    def test_label_must_match_exactly(self):
        schema = schema_from_metadata([{"id": "cf_1", "name": "Story Points (old)"}])
        assert schema.story_point_fields == (DEFAULT_STORY_POINT_FIELD,)

    def test_padded_label_is_not_an_exact_match(self):
        schema = schema_from_metadata([{"id": "cf_1", "name": " Story Points "}])
        assert schema.story_point_fields == (DEFAULT_STORY_POINT_FIELD,)

    def test_non_list_payload_yields_default(self):
        assert schema_from_metadata({"errorMessages": ["nope"]}) == DEFAULT_SCHEMA
        assert schema_from_metadata(None) == DEFAULT_SCHEMA

    def test_skips_malformed_items(self):
        schema = schema_from_metadata(["junk", {"id": 5, "name": "Epic Name"}, {"name": "Story Points"}])
        assert schema == DEFAULT_SCHEMA

    def test_search_fields_projection(self):
        schema = FieldSchema(story_point_fields=("cf_a", "cf_b"), epic_name_field="cf_e")
        assert schema.search_fields() == [
            "summary", "status", "priority", "flagged", "cf_e", "cf_a", "cf_b",
        ]


class TestParseIssue:

    def test_full_issue(self):
        ticket = parse_issue(issue("PROJ-1", "In Progress", flagged=True, epic="Billing"))
        assert ticket == TrackerTicket(
            key="PROJ-1",
            summary="Work on PROJ-1",
            status="In Progress",
            flagged=True,
            epic_name="Billing",
        )

    def test_flag_list_means_flagged(self):
        assert parse_issue(issue("P-1", "To Do", flagged=[{"value": "Impediment"}])).flagged is True
        assert parse_issue(issue("P-2", "To Do", flagged=[])).flagged is False

    def test_flag_of_other_type_is_false(self):
        assert parse_issue(issue("P-1", "To Do", flagged="yes")).flagged is False

    def test_missing_fields_degrade_to_empty(self):
        ticket = parse_issue({"key": "P-9"})
        assert ticket.key == "P-9"
        assert ticket.summary == ""
        assert ticket.status == ""
        assert ticket.flagged is False
        assert ticket.epic_name is None

    def test_status_without_name(self):
        raw = {"key": "P-3", "fields": {"status": None, "summary": 42}}
        ticket = parse_issue(raw)
        assert ticket.status == ""
        assert ticket.summary == ""

    def test_custom_epic_field(self):
        raw = {"key": "P-4", "fields": {"cf_e": "Search"}}
        assert parse_issue(raw, "cf_e").epic_name == "Search"

    def test_empty_epic_is_omitted(self):
        assert parse_issue(issue("P-5", "Done", epic="")).epic_name is None


class TestExtractPoints:

    def test_first_positive_candidate_wins(self):
        raw = {"fields": {"cf_a": 0, "cf_b": 3, "cf_c": 8}}
        assert extract_points(raw, ["cf_a", "cf_b", "cf_c"]) == 3

    def test_fractional_points_truncate(self):
        assert extract_points({"fields": {"cf": 2.5}}, ["cf"]) == 2

    def test_sub_one_fraction_falls_through_to_next_candidate(self):
        raw = {"fields": {"cf_a": 0.5, "cf_b": 3}}
        assert extract_points(raw, ["cf_a", "cf_b"]) == 3

    def test_skips_non_numeric_and_negative(self):
        raw = {"fields": {"a": "5", "b": -2, "c": True, "d": None}}
        assert extract_points(raw, ["a", "b", "c", "d"]) == 0

    def test_no_fields(self):
        assert extract_points({"key": "X"}, ["cf"]) == 0


def test_is_done_ignores_case():
    assert is_done(TrackerTicket(status="DONE"))
    assert is_done(TrackerTicket(status="done"))
    assert not is_done(TrackerTicket(status="Done-ish"))
