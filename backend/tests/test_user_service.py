"""
Tests for the user service
"""
import pytest

from application.services.users import UserService
from core.exceptions import AuthorizationException, ResourceNotFoundException, ValidationException
from domain.enums import UserRole
from domain.value_objects import Actor, Portfolio

from conftest import FIXED_NOW


@pytest.fixture
def user_service(uow_factory, clock):
    return UserService(uow_factory, clock=clock)


PORTFOLIO = {
    "title": "Frontend work",
    "projects": [{"title": "Shop", "description": "E-commerce UI", "technologies": ["React"]}],
    "certifications": [{"name": "AWS CDA", "issuer": "AWS", "date": "2023-01"}],
}


class TestRegisterUser:
    """Test account registration"""

    @pytest.mark.asyncio
    async def test_register_freelancer(self, user_service, store):
        user = await user_service.register_user(
            "freelancer", " Dana ", bio="Designer", skills=["Figma", "figma", "CSS"],
            hourly_rate=60, portfolio=PORTFOLIO,
        )

        assert store.users[user.id] == user
        assert user.display_name == "Dana"
        assert user.skills.to_list() == ["Figma", "CSS"]
        assert user.portfolio.projects[0].technologies == ("React",)
        assert user.created_at == FIXED_NOW

    @pytest.mark.asyncio
    async def test_register_business(self, user_service):
        user = await user_service.register_user(UserRole.BUSINESS, "Initech", company="Initech LLC")

        assert user.is_business()
        assert user.company == "Initech LLC"

    @pytest.mark.asyncio
    async def test_admin_cannot_self_register(self, user_service, store):
        with pytest.raises(ValidationException) as exc_info:
            await user_service.register_user("admin", "Root")

        assert exc_info.value.field == "role"
        assert store.users == {}

    @pytest.mark.asyncio
    async def test_unknown_role(self, user_service):
        with pytest.raises(ValidationException):
            await user_service.register_user("manager", "Pat")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [
        {"role": "freelancer", "display_name": "A"},
        {"role": "business", "display_name": "Acme", "hourly_rate": 50},
        {"role": "freelancer", "display_name": "Dana", "company": "Acme"},
        {"role": "freelancer", "display_name": "Dana", "hourly_rate": -1},
        {"role": "freelancer", "display_name": "Dana", "skills": "python"},
        {"role": "business", "display_name": "Acme", "portfolio": PORTFOLIO},
    ])
    async def test_invalid_profile(self, user_service, store, kwargs):
        with pytest.raises(ValidationException):
            await user_service.register_user(**kwargs)

        assert store.users == {}


class TestUpdateProfile:
    """Test self-service profile edits"""

    @pytest.mark.asyncio
    async def test_updates_own_profile(self, user_service, store, freelancer, freelancer_actor):
        updated = await user_service.update_profile(
            freelancer.id, freelancer_actor, bio="Senior React dev", skills=["React", "GraphQL"], hourly_rate=70,
        )

        assert updated.bio == "Senior React dev"
        assert updated.skills.to_list() == ["React", "GraphQL"]
        assert updated.hourly_rate == 70
        assert updated.updated_at == FIXED_NOW
        assert store.users[freelancer.id] == updated

    @pytest.mark.asyncio
    async def test_updates_portfolio_from_dict(self, user_service, freelancer, freelancer_actor):
        updated = await user_service.update_profile(freelancer.id, freelancer_actor, portfolio=PORTFOLIO)

        assert isinstance(updated.portfolio, Portfolio)
        assert updated.portfolio.certifications[0].issuer == "AWS"

    @pytest.mark.asyncio
    async def test_cannot_edit_someone_else(self, user_service, freelancer, other_freelancer):
        with pytest.raises(AuthorizationException):
            await user_service.update_profile(
                freelancer.id, Actor(other_freelancer.id, UserRole.FREELANCER), bio="hacked"
            )

    @pytest.mark.asyncio
    async def test_rejects_non_editable_fields(self, user_service, store, freelancer, freelancer_actor):
        with pytest.raises(ValidationException):
            await user_service.update_profile(freelancer.id, freelancer_actor, role="admin")

        assert store.users[freelancer.id] == freelancer

    @pytest.mark.asyncio
    async def test_rejects_invalid_values(self, user_service, store, business, business_actor):
        with pytest.raises(ValidationException):
            await user_service.update_profile(business.id, business_actor, hourly_rate=50)

        assert store.users[business.id] == business

    @pytest.mark.asyncio
    async def test_rejects_bad_portfolio(self, user_service, freelancer, freelancer_actor):
        with pytest.raises(ValidationException):
            await user_service.update_profile(
                freelancer.id, freelancer_actor, portfolio={"projects": [{"title": "No description"}]}
            )

    @pytest.mark.asyncio
    async def test_missing_user(self, user_service):
        with pytest.raises(ResourceNotFoundException):
            await user_service.update_profile(404, Actor(404, UserRole.FREELANCER), bio="x")


class TestFreelancerQueries:
    """Test freelancer profile visibility"""

    @pytest.mark.asyncio
    async def test_business_sees_freelancers(
        self, user_service, freelancer, other_freelancer, business_actor
    ):
        assert await user_service.list_freelancers(business_actor) == [freelancer, other_freelancer]
        assert await user_service.get_freelancer(freelancer.id, business_actor) == freelancer

    @pytest.mark.asyncio
    async def test_admin_sees_freelancers(self, user_service, freelancer):
        assert await user_service.get_freelancer(freelancer.id, Actor(1, UserRole.ADMIN)) == freelancer

    @pytest.mark.asyncio
    async def test_freelancer_cannot_browse(self, user_service, freelancer_actor):
        with pytest.raises(AuthorizationException):
            await user_service.list_freelancers(freelancer_actor)

    @pytest.mark.asyncio
    async def test_business_id_is_not_a_freelancer(self, user_service, business, business_actor):
        with pytest.raises(ResourceNotFoundException):
            await user_service.get_freelancer(business.id, business_actor)
