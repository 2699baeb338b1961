from __future__ import annotations

from datetime import date, datetime

import pytest

from src.school_portal.school_portal.academics.model import AcademicScope, SessionOption, TeacherClass
from src.school_portal.school_portal.attendance.scope_selector import ScopeSelector, validate_attendance_date
from src.school_portal.school_portal.core.enums import ScopeStage, UserType
from src.school_portal.school_portal.core.exceptions import InvalidDateError, MissingFieldsError, ValidationError
from src.school_portal.school_portal.session.model import AuthenticatedUser
from src.school_portal.school_portal.session.store import SessionStore
from src.school_portal.school_portal.storage.memory_storage import InMemoryStorage

TODAY = date(2026, 2, 10)


class FakeAcademics:
    def __init__(self):
        self.class_calls = []

    def list_sessions(self):
        return [SessionOption("2024-25"), SessionOption("2025-26", is_active=True)]

    def list_teacher_classes(self, *, teacher_id, session_id):
        self.class_calls.append((teacher_id, session_id))
        return [
            TeacherClass(session_id, "10", "A"),
            TeacherClass(session_id, "10", "B"),
            TeacherClass(session_id, "9", "A"),
            TeacherClass(session_id, "10", "A", subject_id="MATH"),
        ]


def _teacher_session() -> SessionStore:
    store = SessionStore(InMemoryStorage())
    store.save_login("tok", AuthenticatedUser(UserType.TEACHER, "T1", "Asha", email="asha@school.test"))
    return store


def _ready_selector(store=None) -> ScopeSelector:
    selector = ScopeSelector(store or _teacher_session(), today=TODAY)
    selector.select_session("2024-25")
    selector.select_class("10")
    selector.select_section("A")
    return selector


def test_changing_session_resets_class_and_section():
    selector = _ready_selector()
    assert selector.stage == ScopeStage.READY

    scope = selector.select_session("2025-26")

    assert scope.class_id == ""
    assert scope.section == ""
    assert selector.stage == ScopeStage.SESSION_CHOSEN


def test_reselecting_same_session_still_resets():
    selector = _ready_selector()
    scope = selector.select_session("2024-25")
    assert (scope.class_id, scope.section) == ("", "")


def test_changing_class_resets_section_only():
    selector = _ready_selector()
    scope = selector.select_class("9")

    assert scope.session_id == "2024-25"
    assert scope.class_id == "9"
    assert scope.section == ""
    assert selector.stage == ScopeStage.CLASS_CHOSEN


def test_class_requires_session_first():
    selector = ScopeSelector(_teacher_session(), today=TODAY)
    with pytest.raises(ValidationError):
        selector.select_class("10")


def test_stage_progression():
    assert AcademicScope().stage == ScopeStage.EMPTY
    assert AcademicScope("s").stage == ScopeStage.SESSION_CHOSEN
    assert AcademicScope("s", "10").stage == ScopeStage.CLASS_CHOSEN
    assert AcademicScope("s", "10", "A").stage == ScopeStage.SECTION_CHOSEN
    assert AcademicScope("s", "10", "A", "2026-02-10").stage == ScopeStage.READY


def test_date_window_accepts_today_and_two_past_days():
    for day in ("2026-02-10", "2026-02-09", "2026-02-08"):
        assert validate_attendance_date(day, today=TODAY).isoformat() == day


def test_date_window_rejects_future_date():
    with pytest.raises(InvalidDateError) as exc:
        validate_attendance_date("2026-02-11", today=TODAY)
    assert exc.value.title == "Invalid Date"
    assert "future" in exc.value.message


def test_date_window_rejects_three_days_back():
    with pytest.raises(InvalidDateError) as exc:
        validate_attendance_date(date(2026, 2, 7), today=TODAY)
    assert "past days" in exc.value.message


def test_date_window_accepts_datetime_values():
    assert validate_attendance_date(datetime(2026, 2, 9, 17, 45), today=TODAY) == date(2026, 2, 9)
    with pytest.raises(InvalidDateError):
        validate_attendance_date(datetime(2026, 2, 11, 0, 5), today=TODAY)


def test_select_date_drops_time_of_day():
    selector = ScopeSelector(_teacher_session(), today=TODAY)
    assert selector.select_date(datetime(2026, 2, 9, 8, 30)).date == "2026-02-09"


def test_date_window_rejects_garbage():
    with pytest.raises(InvalidDateError):
        validate_attendance_date("10/02/2026", today=TODAY)


def test_initial_date_is_today():
    selector = ScopeSelector(_teacher_session(), today=TODAY)
    assert selector.scope.date == "2026-02-10"


def test_confirm_writes_scope_to_session_store():
    store = _teacher_session()
    selector = _ready_selector(store)
    selector.select_date("2026-02-09")

    scope = selector.confirm()

    assert store.load_academic_scope() == scope
    assert scope == AcademicScope("2024-25", "10", "A", "2026-02-09")


def test_confirm_with_invalid_date_does_not_persist():
    store = _teacher_session()
    selector = _ready_selector(store)
    selector.select_date("2026-03-01")

    with pytest.raises(InvalidDateError):
        selector.confirm()
    assert store.load_academic_scope() is None


def test_confirm_with_missing_section_fails():
    selector = ScopeSelector(_teacher_session(), today=TODAY)
    selector.select_session("2024-25")
    selector.select_class("10")

    with pytest.raises(MissingFieldsError):
        selector.confirm()


def test_clear_resets_and_refuses_when_untouched():
    selector = _ready_selector()
    selector.clear()
    assert selector.scope == AcademicScope(date="2026-02-10")

    with pytest.raises(ValidationError):
        selector.clear()


def test_load_options_preselects_active_session_and_lists_sections():
    academics = FakeAcademics()
    selector = ScopeSelector(_teacher_session(), academics, today=TODAY)

    selector.load_options()

    assert selector.scope.session_id == "2025-26"
    assert academics.class_calls == [("T1", "2025-26")]
    assert selector.classes == ["10", "9"]
    assert selector.sections == []

    selector.select_class("10")
    assert selector.sections == ["A", "B"]
