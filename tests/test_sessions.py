from datetime import date, datetime

from conftest import add, auth_headers, make_user
from app.core.timeutils import week_start
from app.db import AcademicTerm, Enrollment, SchoolClass, UnitSchedule, UnitSession
from app.crud import unit_session as crud_session


def schedule(db, school, day_of_week=1, **extra):
    return add(db, UnitSchedule(
        unit_id=school.unit.id, day_of_week=day_of_week, start_time="08:00", end_time="10:00",
        location="Lab 3", term_id=school.term.id, **extra,
    ))


def enroll(db, student, school_class, status="active"):
    return add(db, Enrollment(
        student_id=student.id, class_id=school_class.id, course_id=school_class.course_id,
        term_id=school_class.term_id, status=status,
    ))


def test_week_start_is_sunday():
    assert week_start(date(2026, 10, 14)) == date(2026, 10, 11)
    assert week_start(date(2026, 10, 11)) == date(2026, 10, 11)
    assert week_start(date(2026, 10, 17)) == date(2026, 10, 11)


# Schedules

def test_create_schedule_defaults_to_active_term(client, teacher_headers, school):
    response = client.post(
        "/api/schedules",
        json={"unitId": school.unit.id, "dayOfWeek": 1, "startTime": "08:00", "endTime": "10:00"},
        headers=teacher_headers,
    )
    assert response.status_code == 201
    assert response.json()["termId"] == school.term.id
    assert response.json()["isActive"] is True


def test_schedule_validation(client, teacher_headers, school):
    base = {"unitId": school.unit.id, "dayOfWeek": 1, "startTime": "08:00", "endTime": "10:00"}
    for bad in ({"dayOfWeek": 7}, {"startTime": "25:00"}, {"startTime": "8:00"}, {"endTime": "07:00"}):
        response = client.post("/api/schedules", json={**base, **bad}, headers=teacher_headers)
        assert response.status_code == 400, bad
    response = client.post("/api/schedules", json={**base, "unitId": 999}, headers=teacher_headers)
    assert response.status_code == 400


def test_schedule_without_any_active_term(client, db, teacher_headers, school):
    school.term.is_active = False
    db.commit()
    response = client.post(
        "/api/schedules",
        json={"unitId": school.unit.id, "dayOfWeek": 2, "startTime": "08:00", "endTime": "09:00"},
        headers=teacher_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No active academic term"


def test_schedule_listings(client, db, student_headers, school, teacher):
    schedule(db, school, day_of_week=3)
    listed = client.get("/api/schedules", headers=student_headers).json()
    assert listed[0]["unitName"] == "Programming I"
    assert listed[0]["unitCode"] == "PRG1"
    assert listed[0]["termName"] == "Term 1 2026"
    assert listed[0]["dayName"] == "Wednesday"
    assert listed[0]["type"] == "recurring"

    by_unit = client.get(f"/api/units/{school.unit.id}/schedules", headers=student_headers).json()
    assert by_unit[0]["type"] == "recurring"

    by_teacher = client.get(f"/api/teachers/{teacher.id}/schedules", headers=student_headers).json()
    assert len(by_teacher) == 1


def test_schedule_status_toggle_and_delete(client, db, teacher_headers, admin_headers, school):
    slot_id = schedule(db, school).id
    off = client.patch(f"/api/schedules/{slot_id}/status", json={"isActive": False}, headers=teacher_headers)
    assert off.status_code == 200
    assert off.json()["isActive"] is False

    not_bool = client.patch(f"/api/schedules/{slot_id}/status", json={"isActive": "no"}, headers=teacher_headers)
    assert not_bool.status_code == 400
    missing = client.patch("/api/schedules/999/status", json={"isActive": True}, headers=teacher_headers)
    assert missing.status_code == 404

    assert client.delete(f"/api/schedules/{slot_id}", headers=teacher_headers).status_code == 403
    assert client.delete(f"/api/schedules/{slot_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/api/schedules/{slot_id}", headers=admin_headers).status_code == 404


# Session generation

def test_generate_current_week(db, school):
    slot = schedule(db, school, day_of_week=1)
    created = crud_session.generate_sessions_for_unit(db, school.unit.id, "week", today=date(2026, 10, 14))
    assert len(created) == 1
    session = created[0]
    assert session.date == date(2026, 10, 12)
    assert session.schedule_id == slot.id
    assert session.week_number == 7
    assert session.start_time == "08:00"
    assert session.location == "Lab 3"
    assert session.is_active is False

    again = crud_session.generate_sessions_for_unit(db, school.unit.id, "week", today=date(2026, 10, 16))
    assert again == []
    assert db.query(UnitSession).count() == 1


def test_generate_whole_term(client, db, teacher_headers, school):
    schedule(db, school, day_of_week=1)
    response = client.post(
        f"/api/units/{school.unit.id}/sessions/generate", params={"scope": "term"}, headers=teacher_headers
    )
    assert response.status_code == 201
    sessions = response.json()
    assert len(sessions) == 15
    assert sessions[0]["date"] == "2026-09-07"
    assert sessions[0]["weekNumber"] == 2
    assert sessions[-1]["date"] == "2026-12-14"

    again = client.post(
        f"/api/units/{school.unit.id}/sessions/generate", params={"scope": "term"}, headers=teacher_headers
    )
    assert again.json() == []


def test_generation_skips_inactive_schedules(db, school):
    schedule(db, school, day_of_week=2, is_active=False)
    assert crud_session.generate_sessions_for_unit(db, school.unit.id, "term") == []


def test_generate_rejects_unknown_scope(client, teacher_headers, school):
    response = client.post(
        f"/api/units/{school.unit.id}/sessions/generate", params={"scope": "year"}, headers=teacher_headers
    )
    assert response.status_code == 400


# One-off sessions

def test_one_off_session(client, teacher_headers, school):
    response = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00", "location": "Hall"},
        headers=teacher_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["scheduleId"] is None
    assert body["termId"] == school.term.id
    assert body["weekNumber"] == 7
    assert body["isActive"] is True

    alias = client.post(
        "/api/unit-sessions",
        json={"unitId": school.unit.id, "date": "2026-10-15", "startTime": "14:00", "endTime": "16:00"},
        headers=teacher_headers,
    )
    assert alias.status_code == 201


def test_one_off_session_needs_a_term(client, db, teacher_headers, school):
    school.term.is_active = False
    db.commit()
    response = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00"},
        headers=teacher_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No active academic term"


def test_student_cannot_create_session(client, student_headers, school):
    response = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00"},
        headers=student_headers,
    )
    assert response.status_code == 403


def test_sessions_by_unit_flag_record_of_work(client, teacher_headers, school):
    session = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00"},
        headers=teacher_headers,
    ).json()
    listed = client.get(f"/api/units/{school.unit.id}/sessions", headers=teacher_headers).json()
    assert listed[0]["hasRecordOfWork"] is False

    client.post("/api/record-of-work", json={"sessionId": session["id"], "topic": "Loops"}, headers=teacher_headers)
    listed = client.get(f"/api/units/{school.unit.id}/sessions", headers=teacher_headers).json()
    assert listed[0]["hasRecordOfWork"] is True

    assert client.get("/api/units/999/sessions", headers=teacher_headers).status_code == 404


# Session status and active sessions

def test_session_status_and_active_listings(
    client, db, teacher_headers, student_headers, school, teacher, student, other_student
):
    enroll(db, student, school.school_class)
    session = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00", "isActive": False},
        headers=teacher_headers,
    ).json()

    assert client.get(f"/api/teacher/{teacher.id}/active-sessions", headers=teacher_headers).json() == []

    opened = client.patch(f"/api/sessions/{session['id']}/status", json={"isActive": True}, headers=teacher_headers)
    assert opened.json()["isActive"] is True

    active = client.get(f"/api/teacher/{teacher.id}/active-sessions", headers=teacher_headers).json()
    assert [s["id"] for s in active] == [session["id"]]

    mine = client.get(f"/api/students/{student.id}/active-sessions", headers=student_headers).json()
    assert mine[0]["unit"]["code"] == "PRG1"
    assert mine[0]["unit"]["course"]["name"] == "Software Engineering"

    theirs = client.get(f"/api/students/{other_student.id}/active-sessions", headers=student_headers)
    assert theirs.status_code == 403
    other = client.get(f"/api/students/{other_student.id}/active-sessions", headers=teacher_headers)
    assert other.json() == []

    cancelled = client.patch(
        f"/api/unit-sessions/{session['id']}/status", json={"isActive": True, "isCancelled": True},
        headers=teacher_headers,
    )
    assert cancelled.json()["isCancelled"] is True
    assert client.get(f"/api/students/{student.id}/active-sessions", headers=student_headers).json() == []


def test_session_status_validation(client, teacher_headers, student_headers, school):
    session = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00"},
        headers=teacher_headers,
    ).json()
    url = f"/api/sessions/{session['id']}/status"
    assert client.patch(url, json={"isActive": "true"}, headers=teacher_headers).status_code == 400
    assert client.patch(url, json={}, headers=teacher_headers).status_code == 400
    assert client.patch(url, json={"isActive": False}, headers=student_headers).status_code == 403
    assert client.patch("/api/sessions/999/status", json={"isActive": True}, headers=teacher_headers).status_code == 404


def test_teacher_cannot_see_another_teachers_active_sessions(client, other_teacher, teacher):
    response = client.get(f"/api/teacher/{teacher.id}/active-sessions", headers=auth_headers(other_teacher))
    assert response.status_code == 403


# Students of a session

def test_students_by_session(client, db, teacher_headers, school, department, student, other_student):
    enroll(db, student, school.school_class)
    enroll(db, other_student, school.school_class, status="dropped")

    unassigned = add(db, SchoolClass(
        name="Other", code="OTH1", course_id=school.course.id, department_id=department.id,
        level_id=school.level.id, term_id=school.term.id,
        start_date=datetime(2026, 9, 1), end_date=datetime(2026, 12, 15),
    ))
    outsider = make_user(db, "student_three", "student", department_id=department.id, admission_number="S003")
    enroll(db, outsider, unassigned)

    session = client.post(
        f"/api/units/{school.unit.id}/sessions",
        json={"date": "2026-10-14", "startTime": "14:00", "endTime": "16:00"},
        headers=teacher_headers,
    ).json()
    students = client.get(f"/api/sessions/{session['id']}/students", headers=teacher_headers).json()
    assert students == [{
        "id": student.id,
        "username": "student_one",
        "fullName": student.full_name,
        "email": "student_one@college.test",
        "class": {"id": school.school_class.id, "name": "SE Year 1 A"},
    }]
    assert client.get("/api/sessions/999/students", headers=teacher_headers).status_code == 404


def test_week_number_counts_from_term_start(db, school):
    term = db.get(AcademicTerm, school.term.id)
    assert crud_session.week_number_for(term, date(2026, 9, 1)) == 1
    assert crud_session.week_number_for(term, date(2026, 8, 30)) == 1
    assert crud_session.week_number_for(term, date(2026, 9, 6)) == 2
    assert crud_session.week_number_for(None, date(2026, 9, 6)) == 1


def test_generate_from_a_single_schedule(client, db, teacher_headers, student_headers, school):
    tuesdays = schedule(db, school, day_of_week=2)
    schedule(db, school, day_of_week=4)
    url = f"/api/schedules/{tuesdays.id}/sessions/generate"
    assert client.post(url, params={"scope": "term"}, headers=student_headers).status_code == 403

    response = client.post(url, params={"scope": "term"}, headers=teacher_headers)
    assert response.status_code == 201
    created = response.json()
    # 2026-09-01 through 2026-12-15, both Tuesdays
    assert len(created) == 16
    assert {s["scheduleId"] for s in created} == {tuesdays.id}
    assert all(date.fromisoformat(s["date"]).weekday() == 1 for s in created)

    assert client.post(url, params={"scope": "term"}, headers=teacher_headers).json() == []
    assert db.query(UnitSession).count() == 16
    missing = client.post("/api/schedules/999/sessions/generate", headers=teacher_headers)
    assert missing.status_code == 404
