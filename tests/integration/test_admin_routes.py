import pytest

from app.db import crud


@pytest.fixture
def admin_client(make_client, admin_session):
    return make_client(admin_session)


@pytest.fixture
def user_client(make_client, user_session):
    return make_client(user_session)


def new_plan(country_id, **overrides):
    data = {
        "carrier": "SoftBank",
        "title": "每日1GB",
        "plan_type": "daily",
        "duration_days": 5,
        "data_per_day": "1GB",
        "price": 250,
        "notes": "每日凌晨1點重置流量、出貨後60日內須安裝",
        "countryId": country_id,
    }
    data.update(overrides)
    return data


class TestAccess:
    def test_requires_login(self, make_client):
        response = make_client().get("/api/admin/data", params={"type": "countries"})
        assert response.status_code == 401

    def test_regular_user_forbidden(self, user_client):
        response = user_client.get("/api/admin/data", params={"type": "countries"})
        assert response.status_code == 403
        assert response.json()["detail"] == "You're not allowed"

    def test_import_forbidden(self, user_client, store):
        response = user_client.post("/api/admin/data/import", json={"countries": [{"name": "Japan", "code": "JP"}]})
        assert response.status_code == 403
        assert crud.get_countries(store) == []


class TestDataCrud:
    def test_list(self, admin_client, japan):
        response = admin_client.get("/api/admin/data", params={"type": "countries"})
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Japan"]

    def test_add_plan_denormalizes_country(self, admin_client, store, japan):
        response = admin_client.post("/api/admin/data", json={
            "type": "plans",
            "data": new_plan(japan["id"], country="Wrong", unexpectedField="x"),
        })
        assert response.status_code == 200
        stored = crud.get_plan(store, response.json()["id"])
        assert stored["country"] == "Japan"
        assert stored["notes"] == ["每日凌晨1點重置流量", "出貨後60日內須安裝"]
        assert stored["currency"] == "TWD"
        assert "unexpectedField" not in stored
        assert "createdAt" in stored

    def test_add_plan_unknown_country(self, admin_client):
        response = admin_client.post("/api/admin/data", json={"type": "plans", "data": new_plan("nope")})
        assert response.status_code == 404

    def test_add_plan_invalid(self, admin_client, japan):
        response = admin_client.post("/api/admin/data", json={
            "type": "plans",
            "data": new_plan(japan["id"], duration_days=0),
        })
        assert response.status_code == 400
        assert "duration_days" in response.json()["detail"]

    def test_carriers_not_writable(self, admin_client):
        response = admin_client.post("/api/admin/data", json={"type": "carriers", "data": {"name": "KT"}})
        assert response.status_code == 400

    def test_update_country(self, admin_client, store, japan):
        response = admin_client.put("/api/admin/data", json={
            "type": "countries",
            "id": japan["id"],
            "data": {"description": "Land of the rising sun"},
        })
        assert response.status_code == 200
        stored = crud.get_country(store, japan["id"])
        assert stored["description"] == "Land of the rising sun"
        assert stored["name"] == "Japan"

    def test_update_missing(self, admin_client):
        response = admin_client.put("/api/admin/data", json={"type": "plans", "id": "nope", "data": {}})
        assert response.status_code == 404
        assert response.json()["detail"] == "Plan not found"

    def test_update_plan(self, admin_client, store, plan):
        response = admin_client.put("/api/admin/data", json={
            "type": "plans",
            "id": plan["id"],
            "data": {"price": 480, "is_popular": True},
        })
        assert response.status_code == 200
        stored = crud.get_plan(store, plan["id"])
        assert stored["price"] == 480
        assert stored["is_popular"] is True

    def test_delete(self, admin_client, store, plan):
        response = admin_client.delete("/api/admin/data", params={"type": "plans", "id": plan["id"]})
        assert response.status_code == 200
        assert crud.get_plan(store, plan["id"]) is None


class TestImportRoute:
    def test_import(self, admin_client, store):
        response = admin_client.post("/api/admin/data/import", json={
            "countries": [{"name": "Japan", "code": "JP"}],
            "plans": [{
                "title": "3GB/5days", "carrier": "Docomo", "country": "JP", "duration_days": 5,
                "total_data": "3GB", "price": 500, "plan_type": "total", "sim_type": "esim",
            }],
        })
        assert response.status_code == 200
        assert response.json() == {
            "countries": {"added": 1, "skipped": 0, "errors": []},
            "plans": {"added": 1, "updated": 0, "skipped": 0, "errors": []},
        }

    def test_invalid_json(self, admin_client):
        response = admin_client.post(
            "/api/admin/data/import",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_not_an_object(self, admin_client):
        response = admin_client.post("/api/admin/data/import", json=[1, 2])
        assert response.status_code == 400
        assert response.json()["detail"] == "Import payload must be a JSON object"


class TestPlanOperations:
    def test_batch_migrate_requires_target(self, admin_client, plan):
        response = admin_client.post("/api/admin/data/batch", json={"action": "migrate", "planIds": [plan["id"]]})
        assert response.status_code == 400

    def test_batch_duplicate(self, admin_client, store, plan):
        response = admin_client.post("/api/admin/data/batch", json={"action": "duplicate", "planIds": [plan["id"]]})
        body = response.json()
        assert body["success"] is True
        assert body["processed"] == 1
        assert crud.get_plan(store, body["newIds"][0])["title"] == "3GB/5days (複製)"

    def test_duplicate_single(self, admin_client, store, plan):
        response = admin_client.post("/api/admin/data/plan/duplicate",
                                     json={"planId": plan["id"], "changes": {"title": "copy"}})
        assert response.status_code == 200
        assert crud.get_plan(store, response.json()["id"])["title"] == "copy"

    def test_migrate_missing_plan(self, admin_client):
        response = admin_client.put("/api/admin/data/plan/migrate",
                                    json={"planId": "nope", "newCountryId": "kr", "newCountryName": "Korea"})
        assert response.status_code == 404

    def test_delete_duplicates(self, admin_client, store, plan):
        admin_client.post("/api/admin/data/plan/duplicate", json={"planId": plan["id"]})
        response = admin_client.post("/api/admin/delete-duplicates")
        assert response.status_code == 200
        assert response.json()["stats"]["duplicatesDeleted"] == 1
        assert len(crud.get_plans(store)) == 1

    def test_seed(self, admin_client, store):
        response = admin_client.post("/api/admin/seed")
        assert response.status_code == 200
        assert response.json()["countries"] == 3
        assert len(crud.get_countries(store)) == 3


class TestMenus:
    MENU = {"title": "日本方案", "description": "", "pdfUrl": "https://cdn.example/jp.pdf", "type": "esim"}

    def test_add_update_delete(self, admin_client, store):
        response = admin_client.post("/api/admin/menus", json=self.MENU)
        assert response.status_code == 201
        menu = response.json()
        created_at = crud.get_menu(store, menu["id"])["createdAt"]

        response = admin_client.put(f"/api/admin/menus/{menu['id']}", json={**self.MENU, "title": "日本方案 2024"})
        assert response.status_code == 200
        assert response.json()["title"] == "日本方案 2024"
        assert crud.get_menu(store, menu["id"])["createdAt"] == created_at

        response = admin_client.delete(f"/api/admin/menus/{menu['id']}")
        assert response.status_code == 200
        assert crud.get_menus(store) == []

    def test_invalid_type(self, admin_client):
        response = admin_client.post("/api/admin/menus", json={**self.MENU, "type": "paper"})
        assert response.status_code == 422
        assert "type" in response.json()["detail"]

    def test_update_missing(self, admin_client):
        response = admin_client.put("/api/admin/menus/nope", json=self.MENU)
        assert response.status_code == 404
