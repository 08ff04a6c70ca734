"""Tests du filtrage / tri / pagination des listes (GET /api/v1/bootcamps)."""


def _names(body):
    return [b["name"] for b in body["data"]]


class TestFiltering:
    def test_comparison_operator(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"), name="Cheap", average_cost=5000)
        make_bootcamp(make_user("publisher"), name="Mid", average_cost=10000)
        make_bootcamp(make_user("publisher"), name="Pricey", average_cost=20000)

        body = client.get("/api/v1/bootcamps?average_cost[lte]=10000&sort=name").get_json()
        assert _names(body) == ["Cheap", "Mid"]

        body = client.get("/api/v1/bootcamps?average_cost[gt]=10000").get_json()
        assert _names(body) == ["Pricey"]

    def test_equality_on_boolean(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"), name="Housed", housing=True)
        make_bootcamp(make_user("publisher"), name="Homeless", housing=False)

        body = client.get("/api/v1/bootcamps?housing=true").get_json()
        assert _names(body) == ["Housed"]

    def test_in_operator(self, client, make_user, make_bootcamp):
        for name in ("Alpha", "Beta", "Gamma"):
            make_bootcamp(make_user("publisher"), name=name)

        body = client.get("/api/v1/bootcamps?name[in]=Alpha,Gamma&sort=name").get_json()
        assert _names(body) == ["Alpha", "Gamma"]

    def test_unknown_fields_are_ignored(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"))
        make_bootcamp(make_user("publisher"))

        body = client.get("/api/v1/bootcamps?colour=blue&name[regex]=x").get_json()
        assert body["count"] == 2

    def test_bad_numeric_value_returns_400(self, client):
        resp = client.get("/api/v1/bootcamps?average_cost[gt]=cheap")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid value for average_cost: cheap"


class TestSelectAndSort:
    def test_select_keeps_id(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"), name="Solo")

        body = client.get("/api/v1/bootcamps?select=name,slug").get_json()
        assert body["data"] == [{"id": body["data"][0]["id"], "name": "Solo", "slug": "solo"}]

    def test_default_sort_is_newest_first(self, client, make_user, make_bootcamp):
        first = make_bootcamp(make_user("publisher"))
        second = make_bootcamp(make_user("publisher"))

        body = client.get("/api/v1/bootcamps").get_json()
        assert [b["id"] for b in body["data"]] == [second, first]

    def test_descending_sort(self, client, make_user, make_bootcamp):
        for name in ("Beta", "Alpha", "Gamma"):
            make_bootcamp(make_user("publisher"), name=name)

        body = client.get("/api/v1/bootcamps?sort=-name").get_json()
        assert _names(body) == ["Gamma", "Beta", "Alpha"]


class TestPagination:
    def test_middle_page_has_next_and_prev(self, client, make_user, make_bootcamp):
        for name in ("A", "B", "C"):
            make_bootcamp(make_user("publisher"), name=name)

        body = client.get("/api/v1/bootcamps?sort=name&page=2&limit=1").get_json()
        assert _names(body) == ["B"]
        assert body["count"] == 1
        assert body["pagination"] == {
            "next": {"page": 3, "limit": 1},
            "prev": {"page": 1, "limit": 1},
        }

    def test_single_page_has_empty_pagination(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"))
        body = client.get("/api/v1/bootcamps").get_json()
        assert body["pagination"] == {}

    def test_page_past_the_end_is_empty(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"))
        body = client.get("/api/v1/bootcamps?page=5").get_json()
        assert body["data"] == []
        assert body["count"] == 0
        assert body["pagination"] == {"prev": {"page": 4, "limit": 25}}

    def test_invalid_limit_returns_400(self, client):
        for bad in ("abc", "0", "-3"):
            resp = client.get(f"/api/v1/bootcamps?limit={bad}")
            assert resp.status_code == 400
            assert resp.get_json()["success"] is False

    def test_non_ascii_digits_return_400(self, client):
        for query in ("page=²", "limit=٣", "page=１"):
            resp = client.get(f"/api/v1/bootcamps?{query}")
            assert resp.status_code == 400
            assert resp.get_json()["success"] is False

    def test_oversized_paging_returns_400(self, client, make_user, make_bootcamp):
        make_bootcamp(make_user("publisher"))
        for query in ("limit=99999999999999999999", "page=9223372036854775807&limit=25"):
            resp = client.get(f"/api/v1/bootcamps?{query}")
            assert resp.status_code == 400
            assert resp.get_json()["success"] is False
        assert client.get("/api/v1/bootcamps").status_code == 200

    def test_oversized_integer_filter_returns_400(self, client):
        resp = client.get("/api/v1/bootcamps?id[gt]=99999999999999999999")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid value for id: 99999999999999999999"
