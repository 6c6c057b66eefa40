"""Tests for the /api/activities endpoints."""

from sqlalchemy import func, select

from outreach_crm.db.models import AdditionalActivityORM


class TestActivities:
    """CRUD tests for additional learning activities."""

    def test_create_activity(self, client, create_company):
        company = create_company()

        response = client.post(
            "/api/activities",
            json={
                "activity": {
                    "companyId": company["id"],
                    "tLevels": True,
                    "apprenticeships": True,
                    "details": "Two Level 3 apprentices",
                    "numberOfLearners": 2,
                    "totalValue": 12000,
                }
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["companyId"] == company["id"]
        assert data["tLevels"] is True
        assert data["apprenticeships"] is True
        assert data["additionalCourses"] is False
        assert data["numberOfLearners"] == 2
        assert float(data["totalValue"]) == 12000

    def test_create_for_missing_company_inserts_nothing(self, client, db_session):
        response = client.post("/api/activities", json={"companyId": "8080", "tLevels": True})

        assert response.status_code == 404
        assert response.json()["code"] == "COMPANY_NOT_FOUND"
        assert db_session.scalar(select(func.count()).select_from(AdditionalActivityORM)) == 0

    def test_negative_learners_rejected(self, client, create_company):
        company = create_company()

        response = client.post(
            "/api/activities", json={"companyId": company["id"], "numberOfLearners": -1}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_list_requires_company_id(self, client):
        response = client.get("/api/activities")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_COMPANY_ID"

    def test_list_for_company(self, client, create_company):
        company = create_company()
        other = create_company("Other Ltd")
        client.post("/api/activities", json={"companyId": company["id"], "details": "first"})
        client.post("/api/activities", json={"companyId": company["id"], "details": "second"})
        client.post("/api/activities", json={"companyId": other["id"], "details": "elsewhere"})

        response = client.get("/api/activities", params={"companyId": company["id"]})

        assert [a["details"] for a in response.json()] == ["first", "second"]

    def test_partial_update(self, client, create_company):
        company = create_company()
        created = client.post(
            "/api/activities",
            json={"companyId": company["id"], "details": "Bootcamp", "totalValue": 500},
        ).json()

        response = client.put(f"/api/activities/{created['id']}", json={"additionalCourses": True})

        assert response.status_code == 200
        data = response.json()
        assert data["additionalCourses"] is True
        assert data["details"] == "Bootcamp"
        assert float(data["totalValue"]) == 500

    def test_get_and_delete(self, client, create_company):
        company = create_company()
        created = client.post("/api/activities", json={"companyId": company["id"]}).json()

        assert client.get(f"/api/activities/{created['id']}").status_code == 200
        assert client.delete(f"/api/activities/{created['id']}").status_code == 204

        response = client.get(f"/api/activities/{created['id']}")
        assert response.status_code == 404
        assert response.json()["code"] == "ACTIVITY_NOT_FOUND"

    def test_total_value_rounded_to_pence(self, client, create_company):
        company = create_company()

        response = client.post(
            "/api/activities", json={"companyId": company["id"], "totalValue": 0.1 + 0.2}
        )

        assert response.status_code == 201
        assert response.json()["totalValue"] == "0.30"
