"""Tests for leadbook.store.models module."""

from datetime import datetime, timedelta, timezone

import pytest

from leadbook.lib.errors import NotFound
from leadbook.lib.names import InterviewName
from leadbook.store.models import Lead, Todo, Wait

# After the "Created" seed, so it sorts last in the timeline
T0 = datetime.now(timezone.utc).replace(microsecond=0) + timedelta(days=1)


def statuses(lead: Lead) -> list[str]:
    return list(lead.status_updates.values())


class TestNewLead:
    """Test Lead.new construction."""

    def test_seeds_created_status(self):
        before = datetime.now(timezone.utc)
        lead = Lead.new("Engineer", "acme.com/jobs/1")
        after = datetime.now(timezone.utc)

        assert lead.position == "Engineer"
        assert lead.source == "acme.com/jobs/1"
        assert statuses(lead) == ["Created"]
        created_at = next(iter(lead.status_updates))
        assert before <= created_at <= after

    def test_starts_with_empty_collections(self):
        lead = Lead.new("Engineer", "referral")
        assert lead.notes == {}
        assert lead.interviews == []
        assert lead.red_flags == []
        assert lead.todo == []
        assert lead.wait == []


class TestNotes:
    """Test note, detail and red flag operations."""

    def test_creates_category_on_first_use(self):
        lead = Lead.new("Engineer", "x")
        lead.add_note("misc", "Met at meetup")
        lead.add_note("misc", "Likes Rust")
        lead.add_note("people", "Hiring manager: Sam")

        assert lead.notes == {
            "misc": ["Met at meetup", "Likes Rust"],
            "people": ["Hiring manager: Sam"],
        }

    def test_detail_is_a_note_under_its_kind(self):
        lead = Lead.new("Engineer", "x")
        lead.add_detail("Salary", "120k")
        assert lead.notes["Salary"] == ["120k"]

    def test_red_flags_keep_order_and_skip_timeline(self):
        lead = Lead.new("Engineer", "x")
        lead.add_red_flag("Unpaid take-home")
        lead.add_red_flag("Vague equity")
        assert lead.red_flags == ["Unpaid take-home", "Vague equity"]
        assert statuses(lead) == ["Created"]


class TestStatusTimeline:
    """Test add_status ordering and collision policy."""

    def test_distinct_times_kept_in_ascending_order(self):
        lead = Lead.new("Engineer", "x")
        lead.add_status(T0 + timedelta(hours=2), "Second")
        lead.add_status(T0 + timedelta(hours=1), "First")

        times = list(lead.status_updates)
        assert times == sorted(times)
        assert statuses(lead) == ["Created", "First", "Second"]

    def test_same_instant_overwrites(self):
        lead = Lead.new("Engineer", "x")
        lead.add_status(T0, "Phone screen booked")
        lead.add_status(T0, "Phone screen moved")

        assert len(lead.status_updates) == 2
        assert lead.status_updates[T0] == "Phone screen moved"

    def test_latest_status(self):
        lead = Lead.new("Engineer", "x")
        lead.add_status(T0, "Applied")
        assert lead.latest_status() == (T0, "Applied")

    def test_latest_status_empty(self):
        lead = Lead(position="Engineer", source="x")
        assert lead.latest_status() is None


class TestTodo:
    """Test todo lifecycle."""

    def test_add_records_status_and_task(self):
        lead = Lead.new("Engineer", "x")
        lead.add_todo(T0, "Send resume", T0 + timedelta(days=7))

        assert lead.todo == [Todo("Send resume", T0 + timedelta(days=7))]
        assert lead.status_updates[T0] == "TODO: Send resume"

    def test_complete_removes_and_logs_done(self):
        """add then complete leaves an empty list and a DONE entry at t2."""
        lead = Lead.new("Engineer", "x")
        t2 = T0 + timedelta(days=2)
        lead.add_todo(T0, "Send resume", T0 + timedelta(days=7))

        done = lead.complete_todo(t2, 0)

        assert done.action == "Send resume"
        assert lead.todo == []
        assert lead.status_updates[t2] == "DONE: Send resume"

    def test_complete_preserves_order_of_rest(self):
        lead = Lead.new("Engineer", "x")
        for i, action in enumerate(["A", "B", "C"]):
            lead.add_todo(T0 + timedelta(minutes=i), action, T0 + timedelta(days=1))

        lead.complete_todo(T0 + timedelta(hours=1), 1)

        assert [t.action for t in lead.todo] == ["A", "C"]

    def test_complete_out_of_range(self):
        lead = Lead.new("Engineer", "x")
        lead.add_todo(T0, "Send resume", T0)

        with pytest.raises(NotFound):
            lead.complete_todo(T0 + timedelta(hours=1), 1)
        assert len(lead.todo) == 1

    def test_complete_on_empty_list(self):
        lead = Lead.new("Engineer", "x")
        with pytest.raises(NotFound):
            lead.complete_todo(T0, 0)
        assert statuses(lead) == ["Created"]


class TestWait:
    """Test wait lifecycle."""

    def test_add_with_and_without_expected(self):
        lead = Lead.new("Engineer", "x")
        lead.add_wait(T0, "Offer letter", T0 + timedelta(days=3))
        lead.add_wait(T0 + timedelta(minutes=1), "Feedback")

        assert lead.wait == [
            Wait("Offer letter", T0 + timedelta(days=3)),
            Wait("Feedback", None),
        ]
        assert lead.status_updates[T0] == "WAITING: Offer letter"

    def test_complete_logs_received(self):
        lead = Lead.new("Engineer", "x")
        lead.add_wait(T0, "Feedback")
        received = lead.complete_wait(T0 + timedelta(days=1), 0)

        assert received.action == "Feedback"
        assert lead.wait == []
        assert lead.status_updates[T0 + timedelta(days=1)] == "RECEIVED: Feedback"

    def test_complete_out_of_range(self):
        lead = Lead.new("Engineer", "x")
        with pytest.raises(NotFound):
            lead.complete_wait(T0, 0)


class TestInterviews:
    """Test pre/post interview notes."""

    def test_pre_interview_creates_entry(self):
        lead = Lead.new("Engineer", "x")
        lead.pre_interview(T0, InterviewName("Phone"), "Read their blog")

        assert len(lead.interviews) == 1
        name, interview = lead.interviews[0]
        assert name == InterviewName("Phone")
        assert interview.pre_notes == ["Read their blog"]
        assert statuses(lead) == ["Created"]

    def test_notes_go_to_most_recent_with_same_name(self):
        lead = Lead.new("Engineer", "x")
        lead.pre_interview(T0, InterviewName("Onsite"), "First onsite prep")
        lead.pre_interview(T0, InterviewName("Onsite"), "Second onsite prep", new_entry=True)
        lead.pre_interview(T0, InterviewName("Onsite"), "More prep")

        assert len(lead.interviews) == 2
        assert lead.interviews[0][1].pre_notes == ["First onsite prep"]
        assert lead.interviews[1][1].pre_notes == ["Second onsite prep", "More prep"]

    def test_planned_interview_logs_status(self):
        lead = Lead.new("Engineer", "x")
        planned = datetime(2031, 5, 4, 15, 0, tzinfo=timezone.utc)
        lead.pre_interview(T0, InterviewName("Phone"), "Prep", planned=planned)

        assert lead.status_updates[T0] == "Interview planned: Phone (2031-05-04)"

    def test_post_interview_logs_held_on(self):
        lead = Lead.new("Engineer", "x")
        held = T0 + timedelta(days=1)
        lead.pre_interview(T0, InterviewName("Phone"), "Prep")
        lead.post_interview(T0 + timedelta(days=2), InterviewName("Phone"), "Went well", held_on=held)

        assert lead.interviews[0][1].post_notes == ["Went well"]
        assert lead.status_updates[held] == "Interview held: Phone"

    def test_post_interview_defaults_to_time(self):
        lead = Lead.new("Engineer", "x")
        lead.post_interview(T0, InterviewName("Panel"), "Tough questions")

        assert len(lead.interviews) == 1
        assert lead.status_updates[T0] == "Interview held: Panel"
