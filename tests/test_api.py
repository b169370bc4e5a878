from fastapi.testclient import TestClient

from shortlink_app.dependencies import get_link_store
from tests.fakes import AlwaysConflictingStore, DownStore


class TestLinksAPI:
    """Test the JSON link endpoints"""

    def test_create_link(self, client: TestClient):
        """Test creating a short link"""
        link_data = {"long_url": "https://www.google.com/"}

        response = client.post("/api/v1/links/", json=link_data)
        assert response.status_code == 201

        data = response.json()
        assert len(data["short_code"]) == 7
        assert data["short_url"] == f"http://short.test/{data['short_code']}"
        assert data["long_url"] == link_data["long_url"]
        assert data["reused"] is False

    def test_create_link_without_trailing_slash(self, client: TestClient):
        """The collection path works with and without the trailing slash"""
        response = client.post("/api/v1/links", json={"long_url": "https://www.google.com/"})
        assert response.status_code == 201
        assert response.json()["reused"] is False

        response = client.post("/api/v1/links/", json={"long_url": "https://www.google.com/"})
        assert response.status_code == 200
        assert response.json()["reused"] is True

    def test_create_same_url_twice(self, client: TestClient):
        """Second request for the same URL returns the existing code"""
        link_data = {"long_url": "https://www.github.com/"}
        first = client.post("/api/v1/links/", json=link_data).json()

        response = client.post("/api/v1/links/", json=link_data)
        assert response.status_code == 200

        data = response.json()
        assert data["short_code"] == first["short_code"]
        assert data["reused"] is True

    def test_create_invalid_url(self, client: TestClient):
        """Test creating a link with an invalid URL"""
        for bad in ("not-a-valid-url", "ftp://example.com/file", ""):
            response = client.post("/api/v1/links/", json={"long_url": bad})
            assert response.status_code == 422

    def test_create_missing_field(self, client: TestClient):
        response = client.post("/api/v1/links/", json={})
        assert response.status_code == 422

    def test_get_link_info(self, client: TestClient):
        """Test getting link information"""
        # Create a link
        create_response = client.post("/api/v1/links/", json={"long_url": "https://www.google.com/"})
        short_code = create_response.json()["short_code"]

        # Get link info
        response = client.get(f"/api/v1/links/{short_code}")
        assert response.status_code == 200

        data = response.json()
        assert data["short_code"] == short_code
        assert data["long_url"] == "https://www.google.com/"
        assert data["short_url"] == f"http://short.test/{short_code}"
        assert data["created_at"] is not None

    def test_get_nonexistent_link(self, client: TestClient):
        """Test getting info for non-existent link"""
        response = client.get("/api/v1/links/nonexistent")
        assert response.status_code == 404

    def test_created_link_redirects(self, client: TestClient):
        create_response = client.post("/api/v1/links/", json={"long_url": "https://www.github.com/"})
        short_code = create_response.json()["short_code"]

        response = client.get(f"/{short_code}", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "https://www.github.com/"


class TestLinksAPIFailures:

    def test_exhausted(self, app, client: TestClient):
        app.dependency_overrides[get_link_store] = AlwaysConflictingStore

        response = client.post("/api/v1/links/", json={"long_url": "https://www.google.com/"})
        assert response.status_code == 503
        assert "after 5 attempts" in response.json()["detail"]

    def test_store_unavailable_on_create(self, app, client: TestClient):
        app.dependency_overrides[get_link_store] = DownStore

        response = client.post("/api/v1/links/", json={"long_url": "https://www.google.com/"})
        assert response.status_code == 503

    def test_store_unavailable_on_info(self, app, client: TestClient):
        app.dependency_overrides[get_link_store] = DownStore

        response = client.get("/api/v1/links/abc1234")
        assert response.status_code == 503
