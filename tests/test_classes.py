from datetime import datetime, timedelta

from conftest import add
from app.core.timeutils import utcnow
from app.db import AcademicTerm, SchoolClass
from app.crud.school_class import calculate_class_status
from app.crud import enrollment as crud_enrollment

START = datetime(2026, 9, 1)
END = datetime(2026, 12, 15)


def test_status_boundaries():
    assert calculate_class_status(START, END, START - timedelta(seconds=1)) == "upcoming"
    assert calculate_class_status(START, END, START) == "active"
    assert calculate_class_status(START, END, END) == "active"
    assert calculate_class_status(START, END, END + timedelta(seconds=1)) == "completed"


def test_cancelled_overrides_dates():
    now = datetime(2026, 10, 1)
    assert calculate_class_status(START, END, now, "cancelled") == "cancelled"
    assert calculate_class_status(START, END, now, None) == "active"


def class_payload(school, **overrides):
    now = utcnow()
    payload = {
        "name": "SE Year 1 B",
        "code": "SE1B",
        "courseId": school.course.id,
        "departmentId": school.course.department_id,
        "levelId": school.level.id,
        "termId": school.term.id,
        "startDate": (now - timedelta(days=10)).isoformat(),
        "endDate": (now + timedelta(days=10)).isoformat(),
    }
    payload.update(overrides)
    return payload


def test_create_class_derives_status(client, admin_headers, school):
    response = client.post(
        "/api/classes", json=class_payload(school, unitIds=[school.unit.id]), headers=admin_headers
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "active"
    assert body["currentStudents"] == 0

    units = client.get(f"/api/classes/{body['id']}/units", headers=admin_headers).json()
    assert [u["id"] for u in units] == [school.unit.id]


def test_upcoming_and_completed_classes(client, admin_headers, school):
    now = utcnow()
    upcoming = class_payload(
        school, code="UP1",
        startDate=(now + timedelta(days=5)).isoformat(), endDate=(now + timedelta(days=50)).isoformat(),
    )
    done = class_payload(
        school, code="OLD1",
        startDate=(now - timedelta(days=50)).isoformat(), endDate=(now - timedelta(days=5)).isoformat(),
    )
    assert client.post("/api/classes", json=upcoming, headers=admin_headers).json()["status"] == "upcoming"
    assert client.post("/api/classes", json=done, headers=admin_headers).json()["status"] == "completed"


def test_end_before_start_is_rejected(client, admin_headers, school):
    now = utcnow()
    payload = class_payload(
        school, startDate=now.isoformat(), endDate=(now - timedelta(days=1)).isoformat()
    )
    assert client.post("/api/classes", json=payload, headers=admin_headers).status_code == 400


def test_timezone_aware_dates_are_normalized(client, admin_headers, school):
    payload = class_payload(
        school, startDate="2026-09-01T03:00:00+03:00", endDate="2026-12-15T00:00:00Z"
    )
    body = client.post("/api/classes", json=payload, headers=admin_headers).json()
    assert body["startDate"].startswith("2026-09-01T00:00:00")


def test_current_students_counts_enrollments(client, db, admin_headers, school, student, other_student):
    for s in (student, other_student):
        crud_enrollment.create_enrollment(db, {
            "student_id": s.id,
            "class_id": school.school_class.id,
            "course_id": school.course.id,
            "term_id": school.term.id,
        })
    listed = client.get("/api/classes", headers=admin_headers).json()
    assert len(listed) == 1
    assert listed[0]["currentStudents"] == 2
    single = client.get(f"/api/classes/{school.school_class.id}", headers=admin_headers).json()
    assert single["currentStudents"] == 2


def test_cancel_and_restore(client, admin_headers, school):
    created = client.post("/api/classes", json=class_payload(school), headers=admin_headers).json()
    cancelled = client.patch(f"/api/classes/{created['id']}", json={"status": "cancelled"}, headers=admin_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    restored = client.patch(f"/api/classes/{created['id']}", json={"status": None}, headers=admin_headers)
    assert restored.json()["status"] == "active"

    bogus = client.patch(f"/api/classes/{created['id']}", json={"status": "completed"}, headers=admin_headers)
    assert bogus.status_code == 400


def test_patch_rejects_inverted_dates(client, admin_headers, school):
    response = client.patch(
        f"/api/classes/{school.school_class.id}",
        json={"endDate": "2026-08-01T00:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_assign_units_skips_existing_pairs(client, admin_headers, school):
    url = f"/api/classes/{school.school_class.id}/units"
    first = client.post(url, json={"unitIds": [school.unit.id, school.unit.id]}, headers=admin_headers)
    assert first.status_code == 200
    second = client.post(url, json={"unitIds": [school.unit.id]}, headers=admin_headers)
    assert [u["id"] for u in second.json()] == [school.unit.id]


def test_class_write_needs_admin_and_missing_is_404(client, admin_headers, hod_headers, school):
    assert client.post("/api/classes", json=class_payload(school), headers=hod_headers).status_code == 403
    assert client.get("/api/classes/999", headers=admin_headers).status_code == 404
    assert client.patch("/api/classes/999", json={"name": "x"}, headers=admin_headers).status_code == 404
    assert client.delete("/api/classes/999", headers=admin_headers).status_code == 404
    class_id = school.school_class.id
    assert client.delete(f"/api/classes/{class_id}", headers=admin_headers).status_code == 204


def test_duplicate_class_code(client, admin_headers, school):
    response = client.post("/api/classes", json=class_payload(school, code="SE1A"), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Class code already exists"


def test_null_for_required_column_is_ignored(client, admin_headers, school):
    response = client.patch(
        f"/api/classes/{school.school_class.id}",
        json={"courseId": None, "name": None, "description": None},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["courseId"] == school.course.id
    assert response.json()["name"] == "SE Year 1 A"
    assert response.json()["description"] is None


def test_classes_filtered_by_term_and_course(client, db, admin_headers, school):
    next_term = add(db, AcademicTerm(
        name="Term 2 2027", start_date=datetime(2027, 1, 4), end_date=datetime(2027, 4, 2),
        week_count=13, is_active=False,
    ))
    add(db, SchoolClass(
        name="SE Year 1 B", code="SE1B", course_id=school.course.id,
        department_id=school.course.department_id, level_id=school.level.id, term_id=next_term.id,
        start_date=datetime(2027, 1, 4), end_date=datetime(2027, 4, 2),
    ))

    def codes(**params):
        return [c["code"] for c in client.get("/api/classes", params=params, headers=admin_headers).json()]

    assert codes() == ["SE1A", "SE1B"]
    assert codes(termId=next_term.id) == ["SE1B"]
    assert codes(courseId=school.course.id) == ["SE1A", "SE1B"]
    assert codes(termId=school.term.id, courseId=school.course.id) == ["SE1A"]
    assert codes(termId=school.term.id, courseId=999) == []


def test_unit_classes_listing_and_assignment(client, admin_headers, hod_headers, teacher_headers, school):
    other = client.post("/api/classes", json=class_payload(school), headers=admin_headers).json()
    url = f"/api/units/{school.unit.id}/classes"
    assert [c["code"] for c in client.get(url, headers=teacher_headers).json()] == ["SE1A"]

    payload = {"classIds": [other["id"], school.school_class.id]}
    assert client.post(url, json=payload, headers=teacher_headers).status_code == 403
    assigned = client.post(url, json=payload, headers=hod_headers)
    assert assigned.status_code == 200
    assert [c["code"] for c in assigned.json()] == ["SE1A", "SE1B"]
    assert assigned.json()[1]["status"] == "active"
    assert client.get("/api/units/999/classes", headers=teacher_headers).status_code == 404
