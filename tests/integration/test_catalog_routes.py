from app.db import crud
from app.models.carrier import CarrierCreate
from app.models.menu import MenuCreate


class TestCatalogRoutes:
    def test_countries(self, make_client, japan):
        response = make_client().get("/api/countries")
        assert response.status_code == 200
        assert [c["code"] for c in response.json()] == ["JP"]

    def test_country_not_found(self, make_client, store):
        response = make_client().get("/api/countries/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Country not found"

    def test_carriers_by_country(self, make_client, store, japan):
        crud.create_carrier(store, CarrierCreate(name="Docomo", countryId=japan["id"]))
        crud.create_carrier(store, CarrierCreate(name="KT", countryId="kr"))

        response = make_client().get("/api/carriers", params={"countryId": japan["id"]})
        assert [c["name"] for c in response.json()] == ["Docomo"]
        assert len(make_client().get("/api/carriers").json()) == 2

    def test_plans_by_country(self, make_client, store, plan):
        client = make_client()
        assert [p["id"] for p in client.get("/api/plans", params={"countryId": plan["countryId"]}).json()] \
            == [plan["id"]]
        assert client.get("/api/plans", params={"countryId": "kr"}).json() == []
        assert client.get(f"/api/plans/{plan['id']}").json()["title"] == "3GB/5days"

    def test_plan_not_found(self, make_client, store):
        assert make_client().get("/api/plans/nope").status_code == 404

    def test_menus(self, make_client, store):
        menu = crud.create_menu(store, MenuCreate(title="韓國方案", pdfUrl="https://cdn.example/kr.pdf",
                                                  type="physical"))
        client = make_client()
        assert [m["title"] for m in client.get("/api/menus").json()] == ["韓國方案"]
        assert client.get(f"/api/menus/{menu['id']}").json()["type"] == "physical"
        assert client.get("/api/menus/nope").status_code == 404
