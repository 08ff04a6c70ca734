"""Tests des routes cursus (imbriquees sous un bootcamp et directes)."""

from app.extensions import db
from app.models.bootcamp import Bootcamp

COURSE_PAYLOAD = {
    "title": "Full Stack Web Development",
    "description": "In this course you will learn full stack web development",
    "weeks": 12,
    "tuition": 10000,
    "minimum_skill": "intermediate",
    "scholarship_available": True,
}


def _add_course(client, owner, bootcamp_id, **overrides):
    payload = {**COURSE_PAYLOAD, **overrides}
    return client.post(
        f"/api/v1/bootcamps/{bootcamp_id}/courses", json=payload, headers=owner.headers
    )


class TestListCourses:
    """GET /api/v1/courses et /api/v1/bootcamps/:id/courses."""

    def test_nested_list_is_scoped_to_bootcamp(self, client, make_user, make_bootcamp):
        first_owner = make_user("publisher")
        second_owner = make_user("publisher")
        first = make_bootcamp(first_owner)
        second = make_bootcamp(second_owner)
        _add_course(client, first_owner, first, title="A")
        _add_course(client, first_owner, first, title="B")
        _add_course(client, second_owner, second, title="C")

        body = client.get(f"/api/v1/bootcamps/{first}/courses").get_json()
        assert body["success"] is True
        assert body["count"] == 2
        assert [c["title"] for c in body["data"]] == ["A", "B"]
        assert "pagination" not in body

    def test_nested_list_for_empty_bootcamp(self, client, make_user, make_bootcamp):
        bootcamp_id = make_bootcamp(make_user("publisher"))
        body = client.get(f"/api/v1/bootcamps/{bootcamp_id}/courses").get_json()
        assert body == {"success": True, "count": 0, "data": []}

    def test_top_level_list_populates_bootcamp(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner, name="Codemasters")
        _add_course(client, owner, bootcamp_id)

        body = client.get("/api/v1/courses").get_json()
        assert body["count"] == 1
        assert "pagination" in body
        course = body["data"][0]
        assert course["bootcamp"]["name"] == "Codemasters"
        assert course["bootcamp"]["id"] == bootcamp_id

    def test_get_single_course(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]

        resp = client.get(f"/api/v1/courses/{course_id}")
        assert resp.status_code == 200
        assert resp.get_json()["data"]["title"] == COURSE_PAYLOAD["title"]

    def test_unknown_course_returns_404(self, client):
        resp = client.get("/api/v1/courses/424242")
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "No course with the id of 424242"

    def test_malformed_course_id_returns_404(self, client):
        for bad_id in ("not-an-id", "²", "٣", "99999999999999999999"):
            resp = client.get(f"/api/v1/courses/{bad_id}")
            assert resp.status_code == 404
            assert resp.get_json()["error"] == "Resource not found"


class TestAddCourse:
    """POST /api/v1/bootcamps/:id/courses."""

    def test_owner_adds_course(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)

        resp = _add_course(client, owner, bootcamp_id)
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["bootcamp_id"] == bootcamp_id
        assert data["user_id"] == owner.id
        assert data["scholarship_available"] is True

    def test_average_cost_is_rounded_up_to_ten(self, app, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        _add_course(client, owner, bootcamp_id, tuition=10000)
        _add_course(client, owner, bootcamp_id, tuition=12001)

        with app.app_context():
            # moyenne 11000.5 -> 11010
            assert db.session.get(Bootcamp, bootcamp_id).average_cost == 11010

    def test_non_owner_cannot_add_course(self, app, client, make_user, make_bootcamp):
        bootcamp_id = make_bootcamp(make_user("publisher"))
        intruder = make_user("publisher")

        resp = _add_course(client, intruder, bootcamp_id)
        assert resp.status_code == 401
        assert resp.get_json()["error"] == (
            f"User {intruder.id} is not authorized to add a course to this bootcamp"
        )
        body = client.get(f"/api/v1/bootcamps/{bootcamp_id}/courses").get_json()
        assert body["count"] == 0

    def test_user_role_cannot_add_course(self, client, make_user, make_bootcamp):
        bootcamp_id = make_bootcamp(make_user("publisher"))
        user = make_user("user")
        resp = _add_course(client, user, bootcamp_id)
        assert resp.status_code == 401

    def test_unknown_bootcamp_returns_404(self, client, make_user):
        publisher = make_user("publisher")
        resp = _add_course(client, publisher, 9999)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "No bootcamp with the id of 9999"

    def test_top_level_post_is_rejected(self, client, make_user):
        publisher = make_user("publisher")
        resp = client.post("/api/v1/courses", json=COURSE_PAYLOAD, headers=publisher.headers)
        assert resp.status_code == 400

    def test_invalid_skill_returns_400(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        resp = _add_course(client, owner, bootcamp_id, minimum_skill="expert")
        assert resp.status_code == 400
        assert "minimum_skill" in resp.get_json()["error"]

    def test_missing_title_returns_400(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        payload = {k: v for k, v in COURSE_PAYLOAD.items() if k != "title"}
        resp = client.post(
            f"/api/v1/bootcamps/{bootcamp_id}/courses", json=payload, headers=owner.headers
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Please add a title"


class TestUpdateDeleteCourse:
    """PUT / DELETE /api/v1/courses/:id."""

    def test_owner_updates_tuition_and_average(self, app, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]

        resp = client.put(
            f"/api/v1/courses/{course_id}", json={"tuition": 5000}, headers=owner.headers
        )
        assert resp.status_code == 200
        assert resp.get_json()["data"]["tuition"] == 5000
        with app.app_context():
            assert db.session.get(Bootcamp, bootcamp_id).average_cost == 5000

    def test_non_owner_update_leaves_course_untouched(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]
        intruder = make_user("publisher")

        resp = client.put(
            f"/api/v1/courses/{course_id}", json={"title": "Hacked"}, headers=intruder.headers
        )
        assert resp.status_code == 401
        title = client.get(f"/api/v1/courses/{course_id}").get_json()["data"]["title"]
        assert title == COURSE_PAYLOAD["title"]

    def test_delete_course_clears_average(self, app, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]

        resp = client.delete(f"/api/v1/courses/{course_id}", headers=owner.headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"success": True, "data": {}}
        assert client.get(f"/api/v1/courses/{course_id}").status_code == 404
        with app.app_context():
            assert db.session.get(Bootcamp, bootcamp_id).average_cost is None

    def test_admin_can_delete_any_course(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]
        admin = make_user("admin")

        resp = client.delete(f"/api/v1/courses/{course_id}", headers=admin.headers)
        assert resp.status_code == 200

    def test_null_fields_are_ignored(self, client, make_user, make_bootcamp):
        owner = make_user("publisher")
        bootcamp_id = make_bootcamp(owner)
        course_id = _add_course(client, owner, bootcamp_id).get_json()["data"]["id"]

        resp = client.put(
            f"/api/v1/courses/{course_id}",
            json={"scholarship_available": None, "title": None, "weeks": 10},
            headers=owner.headers,
        )
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["scholarship_available"] is True
        assert data["title"] == COURSE_PAYLOAD["title"]
        assert data["weeks"] == 10

        assert client.get(f"/api/v1/courses/{course_id}").status_code == 200
        assert client.get("/api/v1/courses").status_code == 200
        assert client.get(f"/api/v1/bootcamps/{bootcamp_id}/courses").status_code == 200
