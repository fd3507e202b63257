from datetime import datetime

from conftest import add, make_user
from app.db import Enrollment, SchoolClass


def second_class(db, school):
    return add(db, SchoolClass(
        name="SE Year 1 B", code="SE1B", course_id=school.course.id,
        department_id=school.course.department_id, level_id=school.level.id,
        term_id=school.term.id, start_date=datetime(2026, 9, 1), end_date=datetime(2026, 12, 15),
    ))


def active_counts(db):
    rows = db.query(Enrollment.student_id).filter(Enrollment.status == "active").all()
    counts = {}
    for (student_id,) in rows:
        counts[student_id] = counts.get(student_id, 0) + 1
    return counts


def test_all_students_enrolled(client, admin_headers, school, student, other_student):
    response = client.post(
        "/api/enrollments",
        json={"studentIds": [student.id, other_student.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert len(body) == 2
    assert body[0]["courseId"] == school.course.id
    assert body[0]["termId"] == school.term.id
    assert body[0]["status"] == "active"


def test_partial_batch_is_207(client, db, admin_headers, school, student, other_student):
    other = second_class(db, school)
    client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": other.id}, headers=admin_headers
    )
    response = client.post(
        "/api/enrollments",
        json={"studentIds": [student.id, other_student.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    assert response.status_code == 207
    body = response.json()
    assert [e["studentId"] for e in body["enrollments"]] == [other_student.id]
    assert body["errors"] == [f"{student.full_name} is already enrolled in another class"]
    assert all(n == 1 for n in active_counts(db).values())


def test_whole_batch_failing_is_400(client, admin_headers, school, student):
    url = "/api/enrollments"
    payload = {"studentIds": [student.id], "classId": school.school_class.id}
    assert client.post(url, json=payload, headers=admin_headers).status_code == 201

    response = client.post(url, json={**payload, "studentIds": [student.id, 999]}, headers=admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Enrollment failed"
    assert body["errors"] == [
        f"{student.full_name} is already enrolled in this class",
        "Student ID 999 not found",
    ]


def test_non_student_is_not_found(client, admin_headers, school, teacher):
    response = client.post(
        "/api/enrollments", json={"studentIds": [teacher.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"] == [f"Student ID {teacher.id} not found"]


def test_duplicate_ids_in_one_batch(client, db, admin_headers, school, student):
    response = client.post(
        "/api/enrollments",
        json={"studentIds": [student.id, student.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    assert response.status_code == 207
    assert active_counts(db) == {student.id: 1}


def test_missing_class_and_empty_batch(client, admin_headers, student):
    missing = client.post("/api/enrollments", json={"studentIds": [student.id], "classId": 999}, headers=admin_headers)
    assert missing.status_code == 404
    empty = client.post("/api/enrollments", json={"studentIds": [], "classId": 1}, headers=admin_headers)
    assert empty.status_code == 400


def test_teacher_cannot_enroll(client, teacher_headers, school, student):
    response = client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": school.school_class.id},
        headers=teacher_headers,
    )
    assert response.status_code == 403


def test_listing_embeds_student_fields_only(client, admin_headers, school, student):
    client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    listed = client.get("/api/enrollments", headers=admin_headers).json()
    assert listed[0]["studentName"] == student.full_name
    assert listed[0]["studentUsername"] == "student_one"
    assert listed[0]["studentEmail"] == "student_one@college.test"
    by_class = client.get(f"/api/classes/{school.school_class.id}/enrollments", headers=admin_headers).json()
    assert [e["studentId"] for e in by_class] == [student.id]


def test_drop_then_enroll_elsewhere_then_reactivate(client, db, admin_headers, school, student):
    other = second_class(db, school)
    first = client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": school.school_class.id},
        headers=admin_headers,
    ).json()[0]

    dropped = client.patch(f"/api/enrollments/{first['id']}", json={"status": "dropped"}, headers=admin_headers)
    assert dropped.json()["status"] == "dropped"

    moved = client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": other.id}, headers=admin_headers
    )
    assert moved.status_code == 201

    reactivate = client.patch(f"/api/enrollments/{first['id']}", json={"status": "active"}, headers=admin_headers)
    assert reactivate.status_code == 400
    assert reactivate.json()["detail"] == "Student already has an active enrollment"
    assert active_counts(db) == {student.id: 1}


def test_hod_can_enroll_and_delete(client, db, hod_headers, school, department):
    newcomer = make_user(db, "student_three", "student", department_id=department.id, admission_number="S003")
    created = client.post(
        "/api/enrollments", json={"studentIds": [newcomer.id], "classId": school.school_class.id},
        headers=hod_headers,
    ).json()[0]
    assert client.delete(f"/api/enrollments/{created['id']}", headers=hod_headers).status_code == 204
    assert client.delete(f"/api/enrollments/{created['id']}", headers=hod_headers).status_code == 404
    assert client.patch("/api/enrollments/999", json={"finalGrade": "A"}, headers=hod_headers).status_code == 404


def test_course_enrollments(client, admin_headers, school, student):
    client.post(
        "/api/enrollments", json={"studentIds": [student.id], "classId": school.school_class.id},
        headers=admin_headers,
    )
    listed = client.get(f"/api/courses/{school.course.id}/enrollments", headers=admin_headers)
    assert listed.status_code == 200
    assert [e["studentUsername"] for e in listed.json()] == ["student_one"]
    assert "password" not in listed.json()[0]
    assert client.get("/api/courses/999/enrollments", headers=admin_headers).status_code == 404
