"""HTTP surface: routing, auth, payload shape and error mapping."""

import pytest


@pytest.fixture
def api(client, auth_headers):
    """POST/GET/PUT helpers that send JSON as the given actor and role."""

    class Api:
        def call(self, method, path, json=None, actor="alice", role="member", **kwargs):
            headers = auth_headers(actor=actor, role=role)
            headers.update(kwargs.pop("headers", {}))
            return client.open(f"/api/v1{path}", method=method, json=json, headers=headers, **kwargs)

        def get(self, path, **kwargs):
            return self.call("GET", path, **kwargs)

        def post(self, path, json=None, **kwargs):
            return self.call("POST", path, json=json if json is not None else {}, **kwargs)

        def put(self, path, json=None, **kwargs):
            return self.call("PUT", path, json=json, **kwargs)

    return Api()


@pytest.fixture
def block_id(api):
    app = api.post("/apps", {"name": "Storefront", "platform": "web"}).get_json()
    block = api.post("/blocks", {"appId": app["id"], "name": "Hero", "type": "component"})
    assert block.status_code == 201
    return block.get_json()["id"]


@pytest.fixture
def version_id(api, block_id):
    response = api.post(
        "/blocks/versions",
        {"blockId": block_id, "version": "1.0.0", "type": "config", "config": {"theme": "dark"}},
    )
    assert response.status_code == 201
    return response.get_json()["id"]


class TestAuth:
    def test_health_is_open(self, client):
        assert client.get("/api/v1/health").get_json()["status"] == "ok"

    def test_token_required(self, client):
        assert client.get("/api/v1/blocks").status_code == 401

    def test_review_needs_reviewer_role(self, api, version_id):
        request_id = api.post("/approvals/submit", {"versionId": version_id}).get_json()["id"]

        response = api.post(f"/approvals/{request_id}/approve", role="member")

        assert response.status_code == 403
        pending = api.get("/approvals/list?status=pending").get_json()
        assert pending["total"] == 1


class TestCatalog:
    def test_environments(self, client):
        envs = client.get("/api/v1/catalog/environments").get_json()

        assert [e["key"] for e in envs] == ["staging", "production"]
        assert envs[1]["requiresApproval"] is True

    def test_regions(self, client):
        body = client.get("/api/v1/catalog/regions").get_json()

        assert body["allRegions"] == "*"
        assert body["memberOptions"][0]["key"] == "*"


class TestReleaseFlow:
    def test_submit_approve_publish_unpublish(self, api, block_id, version_id):
        submitted = api.post("/approvals/submit", {"versionId": version_id})
        assert submitted.status_code == 201
        request_id = submitted.get_json()["id"]

        approved = api.post(f"/approvals/{request_id}/approve", {"comment": "ship it"}, actor="rita", role="reviewer")
        assert approved.status_code == 200
        assert approved.get_json()["reviewedBy"] == "rita"

        published = api.post(f"/blocks/versions/{version_id}/publish", {"environment": "production"})
        assert published.status_code == 200
        body = published.get_json()
        assert body["environments"] == ["production"]
        assert body["productionStatus"] == "published"
        assert body["productionPublishedAt"] is not None

        block = api.get(f"/blocks/{block_id}").get_json()
        assert block["productionVersion"] == "1.0.0"
        assert block["status"] == "published"

        unpublished = api.post(f"/blocks/versions/{version_id}/unpublish", {"environment": "production"})
        assert unpublished.get_json()["environments"] == []
        assert api.get(f"/blocks/{block_id}").get_json()["productionVersion"] is None

    def test_reject_needs_comment(self, api, version_id):
        request_id = api.post("/approvals/submit", {"versionId": version_id}).get_json()["id"]

        response = api.post(f"/approvals/{request_id}/reject", {"comment": "  "}, role="reviewer")

        assert response.status_code == 400
        assert response.get_json()["error"] == "ValidationError"

    def test_approval_by_version(self, api, version_id):
        assert api.get(f"/approvals/version/{version_id}").status_code == 404

        api.post("/approvals/submit", {"versionId": version_id})

        body = api.get(f"/approvals/version/{version_id}").get_json()
        assert body["versionId"] == version_id
        assert body["status"] == "pending"


class TestErrorMapping:
    def test_publish_unapproved_to_production(self, api, version_id):
        response = api.post(f"/blocks/versions/{version_id}/publish", {"environment": "production"})

        assert response.status_code == 409
        body = response.get_json()
        assert body["error"] == "InvalidState"
        assert body["environment"] == "production"
        assert "Production" in body["message"]

    def test_double_publish(self, api, version_id):
        api.post(f"/blocks/versions/{version_id}/publish", {"environment": "staging"})

        response = api.post(f"/blocks/versions/{version_id}/publish", {"environment": "staging"})

        assert response.status_code == 409
        assert response.get_json()["error"] == "Conflict"

    def test_unknown_environment(self, api, version_id):
        response = api.post(f"/blocks/versions/{version_id}/publish", {"environment": "qa"})

        assert response.status_code == 400

    def test_missing_version(self, api):
        response = api.post("/blocks/versions/missing/publish", {"environment": "staging"})

        assert response.status_code == 404
        assert response.get_json()["error"] == "NotFound"

    def test_double_submit(self, api, version_id):
        api.post("/approvals/submit", {"versionId": version_id})

        assert api.post("/approvals/submit", {"versionId": version_id}).status_code == 409


class TestBlocksApi:
    def test_listing_is_paginated(self, api, block_id):
        body = api.get("/blocks?keyword=hero&pageSize=5").get_json()

        assert body["total"] == 1
        assert body["pageSize"] == 5
        assert body["totalPages"] == 1
        assert body["items"][0]["appName"] == "Storefront"

    def test_bad_page_size(self, api, block_id):
        assert api.get("/blocks?pageSize=0").status_code == 400

    def test_update_with_stale_timestamp(self, api, block_id):
        response = api.put(
            f"/blocks/{block_id}",
            {"description": "new"},
            headers={"If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
        )

        assert response.status_code == 409
        assert response.get_json()["error"] == "Conflict"

    def test_update_with_garbled_timestamp(self, api, block_id):
        response = api.put(
            f"/blocks/{block_id}",
            {"description": "new"},
            headers={"If-Unmodified-Since": "yesterday-ish"},
        )

        assert response.status_code == 400

    def test_versions_by_region(self, api, block_id, version_id):
        api.post("/blocks/versions", {"blockId": block_id, "version": "1.0.0", "type": "config", "region": "cn"})

        assert len(api.get(f"/blocks/{block_id}/versions").get_json()) == 2
        assert len(api.get(f"/blocks/{block_id}/versions?region=us").get_json()) == 0
        assert api.get(f"/blocks/{block_id}/regions").get_json() == ["cn", "default"]

    def test_download_counter(self, api, block_id):
        api.post(f"/blocks/{block_id}/download")

        assert api.post(f"/blocks/{block_id}/download").get_json()["downloadCount"] == 2

    def test_archive(self, api, block_id):
        assert api.call("DELETE", f"/blocks/{block_id}").get_json()["status"] == "archived"


class TestAppsApi:
    def test_members(self, api):
        app = api.post("/apps", {"name": "Storefront"}, actor="owner-1").get_json()
        assert app["memberCount"] == 1

        added = api.post(f"/apps/{app['id']}/members", {"userEmail": "dev@example.com", "regions": ["cn"]})
        assert added.status_code == 201
        assert added.get_json()["regions"] == ["cn"]

        me = api.get(f"/apps/{app['id']}/members/me", actor="owner-1").get_json()
        assert me["role"] == "owner"

        members = api.get(f"/apps/{app['id']}/members").get_json()
        assert members["total"] == 2
