"""Tests for the user feature.
Covers: UserService, admin user directory endpoints, public projection.
"""

import pytest
from fastapi import status

from src.features.user.models import User, UserRole
from src.features.user.schemas import UserPublic
from src.features.user.service import UserService
from src.shared.pagination.pagination import PaginationParams

# UserService Unit Tests


class TestUserService:
    async def test_get_user(self, session, make_user):
        user = await make_user(email="one@example.com")

        found = await UserService.get_user(session, user.id)

        assert found is not None
        assert found.email == "one@example.com"

    async def test_get_user_not_found(self, session):
        assert await UserService.get_user(session, 9999) is None

    async def test_get_users_paginates_by_id(self, session, make_user):
        created = [await make_user() for _ in range(5)]

        users, total = await UserService.get_users(session, PaginationParams(page=2, page_size=2))

        assert total == 5
        assert [u.id for u in users] == [created[2].id, created[3].id]

    async def test_get_users_empty(self, session):
        users, total = await UserService.get_users(session, PaginationParams())

        assert users == []
        assert total == 0


class TestUserModel:
    def test_has_role(self):
        user = User(email="x@example.com", password_hash="h", role=UserRole.ADMIN)

        assert user.has_role(UserRole.ADMIN)
        assert not user.has_role(UserRole.USER)

    def test_repr_omits_password_hash(self):
        user = User(id=1, email="x@example.com", password_hash="secret-hash", role=UserRole.USER)

        assert "secret-hash" not in repr(user)

    def test_public_projection(self):
        user = User(id=3, email="x@example.com", name=None, password_hash="h", role=UserRole.USER)

        public = UserPublic.model_validate(user)

        assert public.model_dump(by_alias=True) == {"id": 3, "email": "x@example.com", "name": None, "role": "user"}


# User Directory Endpoints


class TestListUsers:
    async def test_admin_lists_users(self, client, make_user, auth_headers):
        admin = await make_user(email="admin@example.com", role=UserRole.ADMIN)
        await make_user(email="other@example.com")

        response = await client.get("/users", headers=auth_headers(admin))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["pageSize"] == 50
        assert data["totalPages"] == 1
        assert data["hasNext"] is False
        assert [u["email"] for u in data["items"]] == ["admin@example.com", "other@example.com"]
        assert all("passwordHash" not in u for u in data["items"])

    async def test_pagination_query(self, client, make_user, auth_headers):
        admin = await make_user(role=UserRole.ADMIN)
        for _ in range(4):
            await make_user()

        response = await client.get("/users", params={"page": 2, "page_size": 2}, headers=auth_headers(admin))

        data = response.json()["data"]
        assert data["total"] == 5
        assert len(data["items"]) == 2
        assert data["totalPages"] == 3
        assert data["hasNext"] is True

    @pytest.mark.parametrize("params", [{"page": 0}, {"page_size": 0}, {"page_size": 1001}])
    async def test_invalid_pagination(self, client, make_user, auth_headers, params):
        admin = await make_user(role=UserRole.ADMIN)

        response = await client.get("/users", params=params, headers=auth_headers(admin))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_non_admin_forbidden(self, client, make_user, auth_headers):
        user = await make_user()

        response = await client.get("/users", headers=auth_headers(user))

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestGetUser:
    async def test_admin_gets_user(self, client, make_user, auth_headers):
        admin = await make_user(role=UserRole.ADMIN)
        other = await make_user(email="other@example.com", name="Other")

        response = await client.get(f"/users/{other.id}", headers=auth_headers(admin))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "data": {"id": other.id, "email": "other@example.com", "name": "Other", "role": "user"},
        }

    async def test_unknown_user(self, client, make_user, auth_headers):
        admin = await make_user(role=UserRole.ADMIN)

        response = await client.get("/users/9999", headers=auth_headers(admin))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == {"code": "RESOURCE_NOT_FOUND", "message": "User not found"}

    async def test_non_admin_forbidden(self, client, make_user, auth_headers):
        user = await make_user()

        response = await client.get(f"/users/{user.id}", headers=auth_headers(user))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"]["code"] == "AUTH_FORBIDDEN"

    async def test_non_integer_id(self, client, make_user, auth_headers):
        admin = await make_user(role=UserRole.ADMIN)

        response = await client.get("/users/abc", headers=auth_headers(admin))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
