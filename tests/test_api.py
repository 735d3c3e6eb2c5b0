"""Tests for the HTTP API."""
import uuid

import pytest
from httpx import AsyncClient, ASGITransport

API_BASE_URL = "http://test/api"


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url=API_BASE_URL)


def _survey_payload(status="active", **overrides):
    payload = {
        "title": f"API survey {uuid.uuid4().hex[:6]}",
        "description": "Created through the API",
        "status": status,
        "questions": [
            {"id": "q1", "type": "text-input", "text": "Comments", "required": True},
            {"id": "q2", "type": "multiple-choice", "text": "Pick", "options": ["Yes", "No"]},
            {"id": "q3", "type": "slider", "text": "Score", "min": 0, "max": 10},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_health(test_app):
    async with _client(test_app) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


class TestAuthEndpoints:

    @pytest.mark.asyncio
    async def test_signup_login_session_logout(self, test_app):
        suffix = uuid.uuid4().hex[:6]
        payload = {"username": f"person_{suffix}", "email": f"person_{suffix}@example.com", "password": "Password123"}

        async with _client(test_app) as client:
            signup = await client.post("/auth/signup", json=payload)
            assert signup.status_code == 201
            assert signup.json()["role"] == "user"

            login = await client.post("/auth/login", json={"email": payload["email"], "password": "Password123"})
            assert login.status_code == 200
            data = login.json()
            assert data["token_type"] == "bearer"
            assert data["user"]["username"] == payload["username"]
            assert client.cookies.get("surveydesk_session")

            # Cookie-based session
            session = await client.get("/auth/session")
            assert session.status_code == 200
            assert session.json()["email"] == payload["email"]

            logout = await client.post("/auth/logout")
            assert logout.status_code == 204

            after = await client.get("/auth/session")
            assert after.status_code == 401

    @pytest.mark.asyncio
    async def test_bearer_header_fallback(self, test_app, member_user, auth_headers):
        async with _client(test_app) as client:
            response = await client.get("/auth/session", headers=auth_headers(member_user))

        assert response.status_code == 200
        assert response.json()["user_id"] == str(member_user.user_id)

    @pytest.mark.asyncio
    async def test_duplicate_signup_conflicts(self, test_app, member_user):
        payload = {"username": "brand_new", "email": member_user.email, "password": "Password123"}

        async with _client(test_app) as client:
            response = await client.post("/auth/signup", json=payload)

        assert response.status_code == 409
        assert response.json()["detail"] == "email_taken"

    @pytest.mark.asyncio
    async def test_bad_credentials(self, test_app, member_user):
        async with _client(test_app) as client:
            response = await client.post("/auth/login", json={"email": member_user.email, "password": "Wrong12345"})

        assert response.status_code == 401
        assert response.json()["detail"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_malformed_authorization_header(self, test_app):
        async with _client(test_app) as client:
            response = await client.get("/auth/session", headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json()["detail"] == "invalid_authorization_header"


class TestAccessControl:

    @pytest.mark.asyncio
    async def test_missing_credentials(self, test_app):
        async with _client(test_app) as client:
            response = await client.get("/surveys")

        assert response.status_code == 401
        assert response.json()["detail"] == "missing_credentials"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/users"),
            ("get", "/groups"),
            ("post", "/surveys"),
            ("get", "/templates"),
            ("get", "/responses"),
            ("get", "/analytics/overview"),
        ],
    )
    async def test_members_cannot_use_admin_routes(self, test_app, member_user, auth_headers, method, path):
        async with _client(test_app) as client:
            kwargs = {"json": _survey_payload()} if method == "post" else {}
            response = await getattr(client, method)(path, headers=auth_headers(member_user), **kwargs)

        assert response.status_code == 403


class TestSurveyEndpoints:

    @pytest.mark.asyncio
    async def test_full_assignment_and_response_flow(self, test_app, admin_user, member_user, auth_headers):
        admin = auth_headers(admin_user)
        member = auth_headers(member_user)

        async with _client(test_app) as client:
            group = (await client.post("/groups", json={"name": "Field team"}, headers=admin)).json()
            assigned = await client.post(
                f"/groups/{group['group_id']}/assign",
                json={"user_ids": [str(member_user.user_id)]},
                headers=admin,
            )
            assert assigned.status_code == 200
            assert assigned.json()["member_ids"] == [str(member_user.user_id)]

            created = await client.post("/surveys", json=_survey_payload(), headers=admin)
            assert created.status_code == 201
            survey = created.json()
            assert survey["status"] == "active"

            linked = await client.post(
                f"/surveys/{survey['survey_id']}/assign",
                json={"group_ids": [group["group_id"]]},
                headers=admin,
            )
            assert linked.status_code == 200
            assert linked.json()["assigned_group_ids"] == [group["group_id"]]

            group_view = (await client.get(f"/groups/{group['group_id']}", headers=admin)).json()
            assert group_view["assigned_survey_ids"] == [survey["survey_id"]]

            mine = await client.get("/users/assigned-surveys", headers=member)
            assert mine.status_code == 200
            assert [(s["survey_id"], s["group_name"]) for s in mine.json()] == [(survey["survey_id"], "Field team")]

            submitted = await client.post(
                "/responses",
                json={"survey_id": survey["survey_id"], "answers": {"q1": "All good", "q2": "Yes", "q3": 7}},
                headers=member,
            )
            assert submitted.status_code == 201

            listing = await client.get("/responses", params={"survey_id": survey["survey_id"]}, headers=admin)
            assert listing.status_code == 200
            assert listing.json()[0]["username"] == member_user.username
            assert listing.json()[0]["answers"]["q3"] == "7"

            analytics = await client.get(f"/surveys/{survey['survey_id']}/analytics", headers=admin)
            assert analytics.status_code == 200
            body = analytics.json()
            assert body["aggregate"]["total_responses"] == 1
            assert body["aggregate"]["average_answers"] == 3.0
            assert body["aggregate"]["response_distribution"] == {"q1": 1, "q2": 1, "q3": 1}

            overview = await client.get("/analytics/overview", headers=admin)
            assert overview.status_code == 200
            assert overview.json()["summary"]["total_responses"] == 1
            assert overview.json()["leaderboard"][0]["survey_id"] == survey["survey_id"]

    @pytest.mark.asyncio
    async def test_empty_group_ids_is_bad_request(self, test_app, admin_user, auth_headers):
        admin = auth_headers(admin_user)

        async with _client(test_app) as client:
            survey = (await client.post("/surveys", json=_survey_payload(), headers=admin)).json()
            response = await client.post(f"/surveys/{survey['survey_id']}/assign", json={"group_ids": []}, headers=admin)

        assert response.status_code == 400
        assert response.json()["detail"] == "group_ids_required"

    @pytest.mark.asyncio
    async def test_unknown_survey_is_not_found(self, test_app, admin_user, auth_headers):
        async with _client(test_app) as client:
            response = await client.get(f"/surveys/{uuid.uuid4()}", headers=auth_headers(admin_user))

        assert response.status_code == 404
        assert response.json()["detail"] == "survey_not_found"

    @pytest.mark.asyncio
    async def test_invalid_question_payload_is_unprocessable(self, test_app, admin_user, auth_headers):
        payload = _survey_payload(questions=[{"id": "bad", "type": "dropdown", "text": "No options"}])

        async with _client(test_app) as client:
            response = await client.post("/surveys", json=payload, headers=auth_headers(admin_user))

        assert response.status_code == 422
        assert response.json()["detail"] == "Request validation failed"

    @pytest.mark.asyncio
    async def test_status_lifecycle(self, test_app, admin_user, auth_headers):
        admin = auth_headers(admin_user)

        async with _client(test_app) as client:
            survey = (await client.post("/surveys", json=_survey_payload(status="draft"), headers=admin)).json()
            path = f"/surveys/{survey['survey_id']}/status"

            published = await client.patch(path, json={"status": "active"}, headers=admin)
            assert published.json()["status"] == "active"

            backwards = await client.patch(path, json={"status": "draft"}, headers=admin)
            assert backwards.status_code == 400
            assert backwards.json()["detail"] == "invalid_status_transition"

            closed = await client.patch(path, json={"status": "closed"}, headers=admin)
            assert closed.json()["status"] == "closed"

    @pytest.mark.asyncio
    async def test_create_closed_is_bad_request(self, test_app, admin_user, auth_headers):
        async with _client(test_app) as client:
            response = await client.post("/surveys", json=_survey_payload(status="closed"), headers=auth_headers(admin_user))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_response_to_draft_is_rejected(self, test_app, admin_user, member_user, auth_headers):
        async with _client(test_app) as client:
            survey = (
                await client.post("/surveys", json=_survey_payload(status="draft"), headers=auth_headers(admin_user))
            ).json()
            response = await client.post(
                "/responses",
                json={"survey_id": survey["survey_id"], "answers": {"q1": "hi"}},
                headers=auth_headers(member_user),
            )

        assert response.status_code == 400
        assert response.json()["detail"] == "survey_not_active"

    @pytest.mark.asyncio
    async def test_questions_endpoint_and_delete(self, test_app, admin_user, member_user, auth_headers):
        async with _client(test_app) as client:
            survey = (await client.post("/surveys", json=_survey_payload(), headers=auth_headers(admin_user))).json()

            questions = await client.get(f"/surveys/{survey['survey_id']}/questions", headers=auth_headers(member_user))
            assert [q["id"] for q in questions.json()] == ["q1", "q2", "q3"]

            deleted = await client.delete(f"/surveys/{survey['survey_id']}", headers=auth_headers(admin_user))
            assert deleted.status_code == 204

            missing = await client.get(f"/surveys/{survey['survey_id']}", headers=auth_headers(admin_user))
            assert missing.status_code == 404


class TestTemplateEndpoints:

    @pytest.mark.asyncio
    async def test_template_to_survey(self, test_app, admin_user, auth_headers):
        admin = auth_headers(admin_user)
        template_payload = {
            "title": "Team retro",
            "description": "Sprint retrospective",
            "questions": _survey_payload()["questions"],
        }

        async with _client(test_app) as client:
            created = await client.post("/templates", json=template_payload, headers=admin)
            assert created.status_code == 201
            template = created.json()

            exists = await client.post(
                "/templates/check-existing",
                json={"title": "Team retro", "description": "Sprint retrospective"},
                headers=admin,
            )
            assert exists.json() == {"exists": True}

            survey = await client.post(f"/surveys/from-template/{template['template_id']}", headers=admin)
            assert survey.status_code == 201
            assert survey.json()["status"] == "draft"
            assert survey.json()["questions"] == template["questions"]

            renamed = await client.patch(f"/templates/{template['template_id']}", json={"title": "Retro v2"}, headers=admin)
            assert renamed.json()["title"] == "Retro v2"

            deleted = await client.delete(f"/templates/{template['template_id']}", headers=admin)
            assert deleted.status_code == 204


class TestUserAdministration:

    @pytest.mark.asyncio
    async def test_admin_manages_users(self, test_app, admin_user, auth_headers):
        admin = auth_headers(admin_user)
        suffix = uuid.uuid4().hex[:6]

        async with _client(test_app) as client:
            created = await client.post(
                "/users",
                json={"username": f"made_{suffix}", "email": f"made_{suffix}@example.com", "password": "Password123"},
                headers=admin,
            )
            assert created.status_code == 201
            user_id = created.json()["user_id"]

            promoted = await client.patch(f"/users/{user_id}", json={"role": "admin"}, headers=admin)
            assert promoted.json()["role"] == "admin"

            listing = await client.get("/users", headers=admin)
            assert user_id in [user["user_id"] for user in listing.json()]

            deleted = await client.delete(f"/users/{user_id}", headers=admin)
            assert deleted.status_code == 204

            missing = await client.get(f"/users/{user_id}", headers=admin)
            assert missing.status_code == 404
