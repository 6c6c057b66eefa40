"""Tests for the /api/files endpoints."""


def _file(name, company_id=None):
    payload = {"name": name, "type": "application/pdf", "url": f"https://files.example/{name}"}
    if company_id is not None:
        payload["companyId"] = company_id
    return payload


class TestFiles:
    """Tests for registering, listing and deleting files."""

    def test_register_file_for_company(self, client, create_company):
        company = create_company()

        response = client.post("/api/files", json={"file": _file("proposal.pdf", company["id"])})

        assert response.status_code == 201
        data = response.json()
        assert data["companyId"] == company["id"]
        assert data["url"] == "https://files.example/proposal.pdf"

    def test_register_standalone_file(self, client):
        response = client.post("/api/files", json=_file("handbook.pdf"))

        assert response.status_code == 201
        assert response.json()["companyId"] is None

    def test_register_for_missing_company(self, client):
        response = client.post("/api/files", json=_file("lost.pdf", "9999"))

        assert response.status_code == 404
        assert response.json()["code"] == "COMPANY_NOT_FOUND"

    def test_url_required(self, client):
        response = client.post("/api/files", json={"name": "no-url.pdf"})

        assert response.status_code == 400

    def test_list_filters_by_company(self, client, create_company):
        company = create_company()
        client.post("/api/files", json=_file("a.pdf", company["id"]))
        client.post("/api/files", json=_file("b.pdf", company["id"]))
        client.post("/api/files", json=_file("c.pdf"))

        scoped = client.get("/api/files", params={"companyId": company["id"]}).json()
        everything = client.get("/api/files").json()

        assert sorted(f["name"] for f in scoped) == ["a.pdf", "b.pdf"]
        assert len(everything) == 3

    def test_list_is_newest_first(self, client):
        first = client.post("/api/files", json=_file("first.pdf")).json()
        second = client.post("/api/files", json=_file("second.pdf")).json()

        ids = [f["id"] for f in client.get("/api/files").json()]

        assert ids == [second["id"], first["id"]]

    def test_get_and_delete(self, client):
        created = client.post("/api/files", json=_file("temp.pdf")).json()

        assert client.get(f"/api/files/{created['id']}").json()["name"] == "temp.pdf"
        assert client.delete(f"/api/files/{created['id']}").status_code == 204

        response = client.delete(f"/api/files/{created['id']}")
        assert response.status_code == 404
        assert response.json()["code"] == "FILE_NOT_FOUND"
