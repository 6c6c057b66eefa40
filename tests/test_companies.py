"""Tests for the /api/companies endpoints."""

from sqlalchemy import func, select

from outreach_crm.db.models import (
    AdditionalActivityORM,
    CompanyORM,
    CompanyTagORM,
    EngagementORM,
    FileORM,
    FollowUpActionORM,
)

LARGE_ID = "1066067726706802699"


class TestCreateCompany:
    """Tests for POST /api/companies."""

    def test_create_company_wrapped_shape(self, client, sample_company_data):
        response = client.post("/api/companies", json=sample_company_data)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], str)
        assert int(data["id"]) > 0
        assert data["name"] == "Greater Manchester Robotics Ltd"
        assert data["contactName"] == "Priya Shah"
        assert data["aiToolsDelivered"] == ["ChatGPT", "Copilot"]
        assert data["additionalSignUps"] == ["Bootcamp"]
        assert data["resourcesSent"] == []
        assert float(data["valueToCollege"]) == 2500.5
        assert data["createdAt"] is not None

    def test_create_company_flat_shape(self, client):
        response = client.post("/api/companies", json={"name": "Flat Payload Ltd", "sector": "Retail"})

        assert response.status_code == 201
        assert response.json()["sector"] == "Retail"

    def test_create_company_stores_labels_as_json_text(self, client, db_session, sample_company_data):
        company_id = int(client.post("/api/companies", json=sample_company_data).json()["id"])

        stored = db_session.get(CompanyORM, company_id)
        assert stored.ai_tools_delivered == '["ChatGPT", "Copilot"]'

    def test_create_company_accepts_legacy_label_text(self, client):
        response = client.post(
            "/api/companies",
            json={"company": {"name": "Legacy Ltd", "aiToolsDelivered": "ChatGPT, Gemini"}},
        )

        assert response.status_code == 201
        assert response.json()["aiToolsDelivered"] == ["ChatGPT", "Gemini"]

    def test_create_company_links_tags(self, client, db_session, create_tag):
        sector = create_tag("Construction", "Sector")
        location = create_tag("Salford", "Location")

        response = client.post(
            "/api/companies",
            json={"company": {"name": "Tagged Ltd"}, "tagIds": [sector["id"], int(location["id"]), sector["id"]]},
        )

        assert response.status_code == 201
        company_id = int(response.json()["id"])
        links = db_session.scalars(
            select(CompanyTagORM.tag_id).where(CompanyTagORM.company_id == company_id)
        ).all()
        assert sorted(links) == sorted([int(sector["id"]), int(location["id"])])

    def test_create_company_unknown_tag_rolls_back(self, client, db_session):
        response = client.post(
            "/api/companies",
            json={"company": {"name": "Orphan Tags Ltd"}, "tagIds": ["987654"]},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "FOREIGN_KEY_VIOLATION"
        assert db_session.scalar(select(func.count()).select_from(CompanyORM)) == 0

    def test_create_company_missing_name(self, client):
        response = client.post("/api/companies", json={"company": {"industry": "Retail"}})

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["errors"]

    def test_create_company_blank_name_rejected(self, client, db_session):
        response = client.post("/api/companies", json={"company": {"name": "   "}})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert db_session.scalar(select(func.count()).select_from(CompanyORM)) == 0

    def test_update_company_blank_name_rejected(self, client, create_company):
        company = create_company()

        response = client.put(f"/api/companies/{company['id']}", json={"company": {"name": " "}})

        assert response.status_code == 400

    def test_value_to_college_rounded_to_pence(self, client):
        response = client.post("/api/companies", json={"name": "Rounding Ltd", "valueToCollege": 12.345})

        assert response.status_code == 201
        assert response.json()["valueToCollege"] == "12.35"

    def test_create_company_negative_value_rejected(self, client):
        response = client.post("/api/companies", json={"name": "Neg Ltd", "valueToCollege": -5})

        assert response.status_code == 400


class TestGetCompany:
    """Tests for GET /api/companies/{id}."""

    def test_get_company_detail(self, client, create_company, create_tag):
        tag = create_tag("Healthcare", "Sector")
        company = create_company("Detail Ltd", tag_ids=[tag["id"]])
        client.post(
            "/api/engagements",
            json={"engagement": {"companyId": company["id"], "status": "Contacted"}},
        )
        client.post("/api/activities", json={"companyId": company["id"], "tLevels": True})
        client.post(
            "/api/files",
            json={"name": "mou.pdf", "url": "https://files.example/mou.pdf", "companyId": company["id"]},
        )

        response = client.get(f"/api/companies/{company['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == company["id"]
        assert [t["name"] for t in data["tags"]] == ["Healthcare"]
        assert len(data["engagements"]) == 1
        assert data["engagements"][0]["status"] == "Contacted"
        assert len(data["activities"]) == 1
        assert data["activities"][0]["tLevels"] is True
        assert [f["name"] for f in data["files"]] == ["mou.pdf"]

    def test_get_company_with_large_id(self, client, db_session):
        db_session.add(CompanyORM(id=int(LARGE_ID), name="Big Id Ltd"))
        db_session.commit()

        response = client.get(f"/api/companies/{LARGE_ID}")

        assert response.status_code == 200
        assert response.json()["id"] == LARGE_ID

    def test_get_company_not_found(self, client):
        response = client.get("/api/companies/424242")

        assert response.status_code == 404
        assert response.json() == {"detail": "Company not found", "code": "COMPANY_NOT_FOUND"}

    def test_get_company_invalid_id(self, client):
        response = client.get("/api/companies/not-a-number")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_corrupt_label_text_reads_as_empty(self, client, db_session):
        db_session.add(CompanyORM(name="Corrupt Ltd", ai_tools_delivered="[object Object]"))
        db_session.commit()
        company_id = db_session.scalar(select(CompanyORM.id).where(CompanyORM.name == "Corrupt Ltd"))

        response = client.get(f"/api/companies/{company_id}")

        assert response.status_code == 200
        assert response.json()["aiToolsDelivered"] == []


class TestListCompanies:
    """Tests for GET /api/companies."""

    def test_list_companies_empty(self, client):
        response = client.get("/api/companies")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_companies_sorted_by_name(self, client, create_company):
        create_company("Zeta Ltd")
        create_company("Alpha Ltd")
        create_company("Beta Ltd")

        names = [c["name"] for c in client.get("/api/companies").json()]

        assert names == ["Alpha Ltd", "Beta Ltd", "Zeta Ltd"]

    def test_search_is_case_insensitive(self, client, create_company):
        create_company("Northern Rail Training")
        create_company("Southern Foods")

        response = client.get("/api/companies", params={"search": "RAIL"})

        assert [c["name"] for c in response.json()] == ["Northern Rail Training"]

    def test_filters_combine(self, client, create_company):
        create_company("A Ltd", industry="Retail", location="Bolton")
        create_company("B Ltd", industry="Retail", location="Wigan")
        create_company("C Ltd", industry="Finance", location="Bolton")

        response = client.get(
            "/api/companies", params={"industryFilter": "Retail", "locationFilter": "Bolton"}
        )

        assert [c["name"] for c in response.json()] == ["A Ltd"]

    def test_filter_by_tag_ids(self, client, create_company, create_tag):
        digital = create_tag("Digital", "Sector")
        retail = create_tag("Retail", "Sector")
        create_company("Digital Ltd", tag_ids=[digital["id"]])
        create_company("Retail Ltd", tag_ids=[retail["id"]])
        create_company("Untagged Ltd")

        response = client.get("/api/companies", params={"tagIds": f"{digital['id']},{retail['id']}"})

        assert sorted(c["name"] for c in response.json()) == ["Digital Ltd", "Retail Ltd"]

    def test_filter_by_invalid_tag_id(self, client):
        response = client.get("/api/companies", params={"tagIds": "1,abc"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_pagination(self, client, create_company):
        for name in ["A", "B", "C", "D"]:
            create_company(f"{name} Ltd")

        response = client.get("/api/companies", params={"limit": 2, "offset": 1})

        assert [c["name"] for c in response.json()] == ["B Ltd", "C Ltd"]

    def test_limit_out_of_range(self, client):
        response = client.get("/api/companies", params={"limit": 0})

        assert response.status_code == 400


class TestUpdateCompany:
    """Tests for PUT /api/companies/{id}."""

    def test_partial_update_keeps_other_fields(self, client, sample_company_data):
        company = client.post("/api/companies", json=sample_company_data).json()

        response = client.put(
            f"/api/companies/{company['id']}", json={"company": {"location": "Stockport"}}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "Stockport"
        assert data["name"] == company["name"]
        assert data["aiToolsDelivered"] == ["ChatGPT", "Copilot"]
        assert data["contactName"] == "Priya Shah"

    def test_update_replaces_tags_when_given(self, client, db_session, create_company, create_tag):
        old = create_tag("Old", "Sector")
        new = create_tag("New", "Sector")
        company = create_company("Retag Ltd", tag_ids=[old["id"]])

        response = client.put(
            f"/api/companies/{company['id']}",
            json={"company": {"name": "Retag Ltd"}, "tagIds": [new["id"]]},
        )

        assert response.status_code == 200
        links = db_session.scalars(
            select(CompanyTagORM.tag_id).where(CompanyTagORM.company_id == int(company["id"]))
        ).all()
        assert links == [int(new["id"])]

    def test_update_without_tag_ids_keeps_tags(self, client, create_company, create_tag):
        tag = create_tag("Keep", "Sector")
        company = create_company("Keep Tags Ltd", tag_ids=[tag["id"]])

        client.put(f"/api/companies/{company['id']}", json={"company": {"phone": "0161 000"}})

        detail = client.get(f"/api/companies/{company['id']}").json()
        assert [t["name"] for t in detail["tags"]] == ["Keep"]

    def test_update_not_found(self, client):
        response = client.put("/api/companies/999", json={"company": {"name": "Ghost"}})

        assert response.status_code == 404
        assert response.json()["code"] == "COMPANY_NOT_FOUND"


class TestDeleteCompany:
    """Tests for DELETE /api/companies/{id}."""

    def test_delete_cascades_to_dependents(self, client, db_session, create_company, create_tag):
        tag = create_tag("Cascade", "Sector")
        company = create_company("Cascade Ltd", tag_ids=[tag["id"]])
        client.post(
            "/api/engagements",
            json={
                "engagement": {"companyId": company["id"], "status": "Contacted"},
                "followUps": [{"task": "Send brochure", "dueDate": "2030-01-01"}],
            },
        )
        client.post("/api/activities", json={"companyId": company["id"], "apprenticeships": True})
        client.post(
            "/api/files",
            json={"name": "notes.docx", "url": "https://files.example/n.docx", "companyId": company["id"]},
        )

        response = client.delete(f"/api/companies/{company['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/companies/{company['id']}").status_code == 404
        for path in ["/api/engagements", "/api/activities", "/api/files"]:
            assert client.get(path, params={"companyId": company["id"]}).json() == []
        for model in [EngagementORM, FollowUpActionORM, AdditionalActivityORM, FileORM, CompanyTagORM]:
            assert db_session.scalar(select(func.count()).select_from(model)) == 0

    def test_delete_not_found(self, client):
        response = client.delete("/api/companies/31337")

        assert response.status_code == 404
        assert response.json()["code"] == "COMPANY_NOT_FOUND"
