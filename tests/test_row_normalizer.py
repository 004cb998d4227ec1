"""
Tests for raw row adapters - backend rows into core inputs.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from workload.errors import RowNormalizationError
from workload.normalize import (
    assignee_ids,
    assignment_from_row,
    meeting_from_row,
    member_from_row,
    members_from_rows,
    open_timeline_tickets,
    parse_date,
    parse_hours,
    parse_timestamp,
    timeline_ticket_from_row,
)


def _membership(user_id, profile):
    return {"id": f"m_{user_id}", "user_id": user_id, "role": "TICKET_CREATOR", "user_profiles": profile}


class TestMembers:
    def test_profile_object(self):
        member = member_from_row(_membership("u1", {"full_name": "Ana", "weekly_capacity_hours": 32}))
        assert member.user_id == "u1"
        assert member.full_name == "Ana"
        assert member.role == "TICKET_CREATOR"
        assert member.weekly_capacity_hours == 32

    def test_profile_as_list(self):
        member = member_from_row(_membership("u1", [{"full_name": "Ana", "weekly_capacity_hours": 20}]))
        assert member.weekly_capacity_hours == 20

    def test_null_capacity_left_for_default(self):
        member = member_from_row(_membership("u1", {"full_name": "Ana", "weekly_capacity_hours": None}))
        assert member.weekly_capacity_hours is None

    @pytest.mark.parametrize("profile", [None, [], {}])
    def test_missing_profile(self, profile):
        assert member_from_row(_membership("u1", profile)) is None

    def test_members_from_rows_drops_missing_profiles(self):
        rows = [
            _membership("u1", {"full_name": "Ana"}),
            _membership("u2", None),
            _membership("u3", [{"full_name": "Cy"}]),
        ]
        assert [m.user_id for m in members_from_rows(rows)] == ["u1", "u3"]


class TestAssignments:
    def test_union_of_nested_and_legacy(self):
        row = {
            "id": "t1",
            "assigned_to": "u1",
            "estimated_hours": 9,
            "ticket_assignees": [{"user_id": "u1"}, {"user_id": "u2"}, {"user_id": "u3"}],
        }
        assignment = assignment_from_row(row)
        assert assignment.assignee_user_ids == frozenset({"u1", "u2", "u3"})
        assert assignment.share == pytest.approx(3.0)

    def test_legacy_only(self):
        assert assignee_ids({"assigned_to": "u9", "ticket_assignees": None}) == frozenset({"u9"})

    def test_no_assignees(self):
        assignment = assignment_from_row({"id": "t1", "assigned_to": None, "estimated_hours": 5})
        assert assignment.assignee_user_ids == frozenset()
        assert assignment.share == 0

    def test_null_hours(self):
        assert assignment_from_row({"id": "t1", "estimated_hours": None}).estimated_hours == 0


class TestMeetings:
    def test_zulu_timestamps(self):
        meeting = meeting_from_row(
            {
                "id": "m1",
                "title": "Standup",
                "participants": ["u1", "u2"],
                "starts_at": "2024-03-05T09:00:00Z",
                "ends_at": "2024-03-05T09:30:00.000Z",
            }
        )
        assert meeting.starts_at == datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc)
        assert meeting.participant_user_ids == ("u1", "u2")
        assert meeting.title == "Standup"

    def test_non_list_participants(self):
        meeting = meeting_from_row(
            {"participants": "u1", "starts_at": "2024-03-05T09:00:00", "ends_at": "2024-03-05T10:00:00"}
        )
        assert meeting.participant_user_ids == ()

    def test_bad_timestamp_raises(self):
        with pytest.raises(RowNormalizationError) as excinfo:
            meeting_from_row({"participants": [], "starts_at": "next tuesday", "ends_at": "2024-03-05"})
        assert excinfo.value.field == "starts_at"

    def test_missing_timestamp_raises(self):
        with pytest.raises(RowNormalizationError, match="ends_at"):
            meeting_from_row({"participants": [], "starts_at": "2024-03-05T09:00:00"})


class TestTimelineTickets:
    def test_adapts_dates(self):
        ticket = timeline_ticket_from_row(
            {
                "id": "t1",
                "title": "Fix login",
                "status": "ACTIVE",
                "priority": "HIGH",
                "created_at": "2024-03-01T08:15:00",
                "due_date": "2024-03-08",
            }
        )
        assert ticket.created_at == date(2024, 3, 1)
        assert ticket.due_date == date(2024, 3, 8)

    def test_aware_created_at_uses_given_zone(self):
        row = {
            "id": "t1",
            "status": "ACTIVE",
            "created_at": "2024-03-01T22:00:00+00:00",
            "due_date": "2024-03-08",
        }
        ticket = timeline_ticket_from_row(row, tz=timezone(timedelta(hours=4)))
        assert ticket.created_at == date(2024, 3, 2)

    def test_open_tickets_filter(self):
        rows = [
            {"id": "t1", "status": "ACTIVE", "created_at": "2024-03-01", "due_date": "2024-03-08"},
            {"id": "t2", "status": "DONE", "created_at": "2024-03-01", "due_date": "2024-03-08"},
            {"id": "t3", "status": "BACKLOG", "created_at": "2024-03-01", "due_date": None},
        ]
        assert [t.id for t in open_timeline_tickets(rows)] == ["t1"]


class TestScalars:
    def test_parse_timestamp_passthrough(self):
        ts = datetime(2024, 3, 5, 9, 0)
        assert parse_timestamp(ts, "x") is ts

    def test_parse_timestamp_from_date(self):
        assert parse_timestamp(date(2024, 3, 5), "x") == datetime(2024, 3, 5)

    def test_parse_date_passthrough(self):
        assert parse_date(date(2024, 3, 5), "x") == date(2024, 3, 5)

    @pytest.mark.parametrize("value,expected", [(None, 0.0), ("2.5", 2.5), (4, 4.0), ("n/a", 0.0)])
    def test_parse_hours(self, value, expected):
        assert parse_hours(value) == expected

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("2024-13-45", "due_date")
