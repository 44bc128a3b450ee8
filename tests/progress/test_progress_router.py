"""HTTP tests for enrollment and progress endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient


def _course_with_items(
    client: TestClient, headers: dict[str, str], items: int
) -> tuple[str, list[str]]:
    course = client.post(
        "/v1/courses",
        json={"title": "Python", "description": "From zero"},
        headers=headers,
    ).json()
    week = client.post(
        f"/v1/courses/{course['id']}/weeks",
        json={"week_number": 1, "title": "Week 1", "order": 1},
        headers=headers,
    ).json()
    content_ids = []
    for order in range(items):
        item = client.post(
            f"/v1/weeks/{week['id']}/content",
            json={
                "title": f"Lesson {order}",
                "content_type": "text",
                "content": "Read me",
                "order": order,
            },
            headers=headers,
        ).json()
        content_ids.append(item["id"])
    return course["id"], content_ids


class TestEnrollmentEndpoints:
    """/v1/enrollments and /v1/courses/{id}/enrollments."""

    def test_enroll_and_list(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, _ = _course_with_items(client, instructor_headers, items=1)

        created = client.post(
            "/v1/enrollments", json={"courseId": course_id}, headers=student_headers
        )
        mine = client.get("/v1/enrollments/my", headers=student_headers)

        assert created.status_code == 201
        assert created.json()["progress_percentage"] == 0
        assert [e["course_id"] for e in mine.json()] == [course_id]

    def test_duplicate_enrollment(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, _ = _course_with_items(client, instructor_headers, items=1)
        body = {"course_id": course_id}

        assert (
            client.post("/v1/enrollments", json=body, headers=student_headers).status_code
            == 201
        )
        second = client.post("/v1/enrollments", json=body, headers=student_headers)

        assert second.status_code == 409

    def test_instructor_cannot_enroll(
        self, client: TestClient, instructor_headers: dict[str, str]
    ) -> None:
        course_id, _ = _course_with_items(client, instructor_headers, items=1)

        response = client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=instructor_headers
        )

        assert response.status_code == 403

    def test_enroll_unknown_course(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/v1/enrollments", json={"course_id": str(uuid4())}, headers=student_headers
        )
        assert response.status_code == 404

    def test_course_enrollments_owner_only(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        other_instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, _ = _course_with_items(client, instructor_headers, items=1)
        client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=student_headers
        )

        owner = client.get(
            f"/v1/courses/{course_id}/enrollments", headers=instructor_headers
        )
        stranger = client.get(
            f"/v1/courses/{course_id}/enrollments", headers=other_instructor_headers
        )

        assert owner.status_code == 200
        assert len(owner.json()) == 1
        assert stranger.status_code == 403


class TestProgressEndpoints:
    """/v1/progress and /v1/enrollments/{id}/progress."""

    def test_completion_updates_percentage(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, contents = _course_with_items(client, instructor_headers, items=3)
        enrollment = client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=student_headers
        ).json()

        for content_id in contents[:2]:
            response = client.post(
                "/v1/progress",
                json={"enrollmentId": enrollment["id"], "contentItemId": content_id},
                headers=student_headers,
            )
            assert response.status_code == 200
            assert response.json()["completed"] is True

        mine = client.get("/v1/enrollments/my", headers=student_headers).json()
        assert mine[0]["progress_percentage"] == 67
        assert mine[0]["current_content_id"] == contents[1]

    def test_content_from_other_course(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, _ = _course_with_items(client, instructor_headers, items=1)
        _, foreign = _course_with_items(client, instructor_headers, items=1)
        enrollment = client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=student_headers
        ).json()

        response = client.post(
            "/v1/progress",
            json={"enrollment_id": enrollment["id"], "content_id": foreign[0]},
            headers=student_headers,
        )

        assert response.status_code == 400

    def test_someone_elses_enrollment(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
        other_student_headers: dict[str, str],
    ) -> None:
        course_id, contents = _course_with_items(client, instructor_headers, items=1)
        enrollment = client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=student_headers
        ).json()

        write = client.post(
            "/v1/progress",
            json={"enrollment_id": enrollment["id"], "content_id": contents[0]},
            headers=other_student_headers,
        )
        read = client.get(
            f"/v1/enrollments/{enrollment['id']}/progress",
            headers=other_student_headers,
        )

        assert write.status_code == 403
        assert read.status_code == 403

    def test_score_out_of_range_is_invalid(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/v1/progress",
            json={
                "enrollment_id": str(uuid4()),
                "content_id": str(uuid4()),
                "score": 150,
            },
            headers=student_headers,
        )
        assert response.status_code == 422

    def test_owner_reads_progress(
        self,
        client: TestClient,
        instructor_headers: dict[str, str],
        student_headers: dict[str, str],
    ) -> None:
        course_id, contents = _course_with_items(client, instructor_headers, items=1)
        enrollment = client.post(
            "/v1/enrollments", json={"course_id": course_id}, headers=student_headers
        ).json()
        client.post(
            "/v1/progress",
            json={
                "enrollment_id": enrollment["id"],
                "content_id": contents[0],
                "score": 88,
            },
            headers=student_headers,
        )

        response = client.get(
            f"/v1/enrollments/{enrollment['id']}/progress",
            headers=instructor_headers,
        )

        assert response.status_code == 200
        assert response.json()[0]["score"] == 88
