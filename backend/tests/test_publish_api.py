"""HTTP-level tests for the publish and project endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from mytube.auth.auth_guard import get_current_user
from mytube.common.errors import (
    ConfigError,
    NotFoundError,
    ProcessError,
    StorageError,
    ValidationError,
)
from mytube.main import app
from mytube.projects.dto.project_dto import ProjectDetailDto, ProjectSummaryDto
from mytube.projects.project_service import ProjectService
from mytube.publish.dto.publish_dto import PublishResponseDto
from mytube.publish.publish_service import PublishService
from mytube.users.user_model import UserModel

USER = UserModel(id=7, username="editor")


class StubPublishService:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.requests = []

    async def publish(self, request, user):
        self.requests.append((request, user))
        if self.error is not None:
            raise self.error
        return PublishResponseDto(video_id=55, timeline_name=request.timeline_name)


def _client(service=None, authenticated: bool = True) -> TestClient:
    app.dependency_overrides.clear()
    if authenticated:
        app.dependency_overrides[get_current_user] = lambda: USER
    if service is not None:
        app.dependency_overrides[PublishService] = lambda: service
    return TestClient(app)


def teardown_function() -> None:
    app.dependency_overrides.clear()


def test_health() -> None:
    response = _client().get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_publish_requires_login() -> None:
    client = _client(StubPublishService(), authenticated=False)
    response = client.post("/api/generate/publish", json={"title": "x", "timeline": []})
    assert response.status_code == 401
    assert response.json() == {"detail": "Not logged in"}


def test_publish_success_shape() -> None:
    service = StubPublishService()
    response = _client(service).post(
        "/api/generate/publish",
        json={
            "title": "Cut",
            "timelineName": "Draft 2",
            "tags": "a,b",
            "timeline": [{"videoId": "A", "in": 0, "out": 1}],
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "videoId": 55,
        "timelineName": "Draft 2",
        "playbackUrl": None,
    }
    request, user = service.requests[0]
    assert user.id == 7
    assert request.timeline == [{"videoId": "A", "in": 0, "out": 1}]


def test_publish_defaults_timeline_name() -> None:
    response = _client(StubPublishService()).post(
        "/api/generate/publish", json={"title": "Cut", "timeline": []}
    )
    assert response.json()["timelineName"] == "Timeline"


def test_validation_error_is_400_with_message() -> None:
    service = StubPublishService(ValidationError("Unknown clip videoId 9"))
    response = _client(service).post("/api/generate/publish", json={"title": "Cut"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Unknown clip videoId 9"}


def test_infrastructure_errors_do_not_leak_details() -> None:
    cases = [
        (ConfigError("Missing env UPLOADS_BUCKET"), 500),
        (ProcessError("/tmp/mytube-export-x/inputs/src-0-A.mp4: Invalid data"), 500),
        (StorageError("S3 download failed for uploads/1/a.mp4"), 502),
        (RuntimeError("connection reset /var/run/db.sock"), 500),
    ]
    for error, status_code in cases:
        response = _client(StubPublishService(error)).post(
            "/api/generate/publish", json={"title": "Cut"}
        )
        assert response.status_code == status_code
        detail = response.json()["detail"]
        assert "/" not in detail
        assert str(error) not in detail


class StubProjectService:
    def __init__(self):
        self.saved = []

    async def list_projects(self, user):
        return [ProjectSummaryDto(id=1, title="First")]

    async def create_project(self, dto, user):
        return 12

    async def get_project(self, project_id, user):
        if project_id != 1:
            raise NotFoundError("Not found")
        return ProjectDetailDto(id=1, title="First", timeline=[{"videoId": "A"}])

    async def save_project(self, project_id, dto, user):
        if project_id != 1:
            raise NotFoundError("Not found")
        self.saved.append((project_id, dto))


def _project_client(service: StubProjectService) -> TestClient:
    client = _client()
    app.dependency_overrides[ProjectService] = lambda: service
    return client


def test_project_routes() -> None:
    service = StubProjectService()
    client = _project_client(service)

    assert client.get("/api/generate/projects").json()[0]["title"] == "First"
    assert client.post("/api/generate/projects", json={}).json() == {"id": 12}
    assert client.get("/api/generate/projects/1").json()["timeline"] == [{"videoId": "A"}]

    response = client.patch("/api/generate/projects/1", json={"timeline": []})
    assert response.json() == {"ok": True}
    assert service.saved[0][1].timeline == []


def test_project_not_found() -> None:
    client = _project_client(StubProjectService())
    assert client.get("/api/generate/projects/2").status_code == 404
    assert client.patch("/api/generate/projects/2", json={"title": "x"}).status_code == 404


def test_loose_field_types_are_coerced_to_text() -> None:
    service = StubPublishService()
    response = _client(service).post(
        "/api/generate/publish",
        json={"title": 2024, "tags": ["Cats", "dogs"], "visibility": "private", "timeline": []},
    )

    assert response.status_code == 200
    request, _ = service.requests[0]
    assert request.title == "2024"
    assert request.tags == "Cats,dogs"
