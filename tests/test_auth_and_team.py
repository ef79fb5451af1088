"""
Tests for sign-up, login and team membership.
"""

import pytest
from sqlalchemy import select

from hiring_dashboard.core.security import SessionManager, hash_password, verify_password
from hiring_dashboard.errors import AuthorizationError, NotFoundError, ValidationError
from hiring_dashboard.models import TeamMember, TeamRoles
from hiring_dashboard.services.auth_service import AuthService
from hiring_dashboard.services.company_selection_service import CompanySelectionService
from hiring_dashboard.services.team_service import TeamService

from conftest import TEST_PASSWORD, add_user

pytestmark = pytest.mark.unit


async def test_sign_up_creates_user_company_and_admin_membership(db):
    user, company = await AuthService(db).sign_up("  Founder@Startup.Example.com ", "hunter22", "  Startup  ")

    assert user.email == "founder@startup.example.com"
    assert company.name == "Startup"
    assert company.subscription_status == "trial"
    assert company.settings == {}
    assert verify_password("hunter22", user.hashed_password)

    result = await db.execute(select(TeamMember).where(TeamMember.user_id == user.id))
    membership = result.scalar_one()
    assert membership.company_id == company.id
    assert membership.role == TeamRoles.ADMIN


@pytest.mark.parametrize(
    "email,password,company_name,message",
    [
        ("a@example.com", "hunter22", "   ", "Company name is required"),
        ("a@example.com", "hunter22", "x" * 256, "Company name must be at most 255 characters"),
        ("", "hunter22", "Startup", "Email is required"),
        ("a@example.com", "short", "Startup", "Password must be at least 6 characters"),
        ("a@example.com", "", "Startup", "Password must be at least 6 characters"),
    ],
)
async def test_sign_up_validation(db, email, password, company_name, message):
    with pytest.raises(ValidationError) as exc_info:
        await AuthService(db).sign_up(email, password, company_name)

    assert exc_info.value.message == message


async def test_sign_up_rejects_duplicates(db, acme):
    service = AuthService(db)

    with pytest.raises(ValidationError) as exc_info:
        await service.sign_up(acme.admin_email.upper(), "hunter22", "Brand New Co")
    assert exc_info.value.message == "Email is already registered"

    with pytest.raises(ValidationError) as exc_info:
        await service.sign_up("someone@example.com", "hunter22", "Acme")
    assert exc_info.value.message == "Company name already exists"


async def test_authenticate(db, acme):
    service = AuthService(db)

    user = await service.authenticate(acme.admin_email, TEST_PASSWORD)
    assert user is not None and user.id == acme.admin_id

    assert await service.authenticate(acme.admin_email, "wrong-password") is None
    assert await service.authenticate("nobody@example.com", TEST_PASSWORD) is None


def test_password_hashing_round_trip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_session_tokens_are_signed():
    manager = SessionManager("test-secret", max_age=60)
    other = SessionManager("other-secret", max_age=60)
    token = manager.create_session_token("3f0c8a9e-0000-4000-8000-000000000001", "a@example.com")

    assert manager.verify_session_token(token)["email"] == "a@example.com"
    assert other.verify_session_token(token) is None
    assert manager.verify_session_token("garbage") is None


async def test_admin_adds_registered_user_as_member(db, acme, acme_ctx, password_hash):
    user_id = await add_user(db, "newhire@example.com", password_hash)
    await db.commit()

    member, email = await TeamService(db).add_member(acme_ctx, "NewHire@example.com")

    assert member.user_id == user_id
    assert member.role == TeamRoles.MEMBER
    assert email == "newhire@example.com"

    listed = await TeamService(db).list_members(acme_ctx)
    assert sorted(e for _, e in listed) == [acme.admin_email, "newhire@example.com"]

    companies = await CompanySelectionService(db).list_selectable_companies(user_id)
    assert [c.id for c in companies] == [acme.company_id]


async def test_add_member_requires_registered_user(db, acme, acme_ctx):
    with pytest.raises(NotFoundError) as exc_info:
        await TeamService(db).add_member(acme_ctx, "ghost@example.com")

    assert exc_info.value.message == "User not found. Please ensure they have registered first."


async def test_add_member_rejects_duplicates_and_bad_roles(db, acme, acme_ctx):
    service = TeamService(db)

    with pytest.raises(ValidationError):
        await service.add_member(acme_ctx, acme.admin_email)
    with pytest.raises(ValidationError):
        await service.add_member(acme_ctx, acme.admin_email, role="owner")


async def test_members_cannot_manage_team(db, acme, acme_member_ctx):
    with pytest.raises(AuthorizationError):
        await TeamService(db).add_member(acme_member_ctx, acme.admin_email)


async def test_last_admin_cannot_be_removed(db, acme, acme_ctx):
    service = TeamService(db)
    admin_row = next(m for m, email in await service.list_members(acme_ctx) if email == acme.admin_email)

    with pytest.raises(ValidationError):
        await service.remove_member(acme_ctx, admin_row.id)


async def test_admin_removes_member(db, acme, acme_ctx, acme_member_ctx):
    service = TeamService(db)
    member_row = next(m for m, _ in await service.list_members(acme_ctx) if m.role == TeamRoles.MEMBER)
    member_id = member_row.id

    await service.remove_member(acme_ctx, member_id)

    remaining = await service.list_members(acme_ctx)
    assert [m.id for m, _ in remaining if m.id == member_id] == []
