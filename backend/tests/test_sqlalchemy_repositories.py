"""
Tests for the SQLAlchemy repositories and unit of work (SQLite via aiosqlite)
"""
import asyncio

import pytest

from core.config import Settings
from core.database import Database
from core.exceptions import ProposalFinalizedException, RepositoryException
from domain.entities import Job, Proposal, User
from domain.enums import JobStatus, MatchSource, UserRole
from domain.value_objects import Actor, Portfolio, ProposalStatus, SkillSet
from infrastructure.container import ServiceContainer
from infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
def sqlite_settings(tmp_path):
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/test.db", OPENROUTER_API_KEY=None)


@pytest.fixture
async def database(sqlite_settings):
    db = Database(sqlite_settings)
    await db.init_models()
    yield db
    await db.dispose()


@pytest.fixture
def uow(database):
    return lambda: SQLAlchemyUnitOfWork(database.session_factory)


async def seed(uow):
    async with uow() as tx:
        business = await tx.users.create(User(id=None, role=UserRole.BUSINESS, display_name="Acme", company="Acme"))
        freelancer = await tx.users.create(User(
            id=None,
            role=UserRole.FREELANCER,
            display_name="Fran",
            skills=SkillSet.of(["React", "SQL"]),
            hourly_rate=50,
            portfolio=Portfolio.from_dict({"title": "Work", "projects": [
                {"title": "Shop", "description": "Storefront", "technologies": ["React"]},
            ]}),
        ))
        job = await tx.jobs.create(Job(
            id=None,
            title="Dashboard",
            description="Build a dashboard",
            budget=900,
            business_id=business.id,
            skills=SkillSet.of(["react"]),
        ))
    return business, freelancer, job


class TestSQLAlchemyRepositories:
    """Test entity round trips through the ORM"""

    @pytest.mark.asyncio
    async def test_user_round_trip(self, uow):
        _, freelancer, _ = await seed(uow)

        async with uow() as tx:
            loaded = await tx.users.get_by_id(freelancer.id)
            freelancers = await tx.users.list_by_role(UserRole.FREELANCER)

        assert loaded.skills.to_list() == ["React", "SQL"]
        assert loaded.portfolio.projects[0].technologies == ("React",)
        assert loaded.hourly_rate == 50
        assert [u.id for u in freelancers] == [freelancer.id]

    @pytest.mark.asyncio
    async def test_job_filters(self, uow):
        business, _, job = await seed(uow)

        async with uow() as tx:
            closed = await tx.jobs.update(Job(
                id=job.id,
                title=job.title,
                description=job.description,
                budget=job.budget,
                business_id=business.id,
                skills=job.skills,
                status=JobStatus.CLOSED,
            ))
            open_jobs = await tx.jobs.list_jobs(status=JobStatus.OPEN)
            own_jobs = await tx.jobs.list_jobs(business_id=business.id)

        assert closed.status == JobStatus.CLOSED
        assert open_jobs == []
        assert [j.id for j in own_jobs] == [job.id]

    @pytest.mark.asyncio
    async def test_proposal_crud(self, uow):
        _, freelancer, job = await seed(uow)

        async with uow() as tx:
            created = await tx.proposals.create(Proposal(
                id=None,
                job_id=job.id,
                freelancer_id=freelancer.id,
                cover_letter="Hello",
                proposed_rate=45,
                status=ProposalStatus.APPLIED,
            ))

        async with uow() as tx:
            locked = await tx.proposals.get_for_update(created.id)
            assert locked.status == ProposalStatus.APPLIED
            await tx.proposals.update(Proposal(
                id=locked.id,
                job_id=locked.job_id,
                freelancer_id=locked.freelancer_id,
                cover_letter=locked.cover_letter,
                proposed_rate=locked.proposed_rate,
                status=ProposalStatus.WAITLIST,
            ))

        async with uow() as tx:
            assert (await tx.proposals.get_by_id(created.id)).status == ProposalStatus.WAITLIST
            assert [p.id for p in await tx.proposals.list_by_job(job.id)] == [created.id]
            assert [p.id for p in await tx.proposals.list_by_freelancer(freelancer.id)] == [created.id]
            assert await tx.proposals.delete(created.id) is True
            assert await tx.proposals.delete(created.id) is False

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, uow):
        business, _, _ = await seed(uow)

        with pytest.raises(RuntimeError):
            async with uow() as tx:
                await tx.users.create(User(id=None, role=UserRole.BUSINESS, display_name="Ghost"))
                raise RuntimeError("boom")

        async with uow() as tx:
            businesses = await tx.users.list_by_role(UserRole.BUSINESS)
        assert [b.id for b in businesses] == [business.id]

    @pytest.mark.asyncio
    async def test_update_missing_row(self, uow):
        with pytest.raises(RepositoryException):
            async with uow() as tx:
                await tx.users.update(User(id=999, role=UserRole.BUSINESS, display_name="Nobody"))

    @pytest.mark.asyncio
    async def test_health_check(self, database):
        assert await database.health_check() is True


class TestServiceContainer:
    """Test the wired service graph against SQLite"""

    @pytest.mark.asyncio
    async def test_offer_accept_then_finalized(self, sqlite_settings):
        container = ServiceContainer(settings=sqlite_settings, setup_logging=False)
        await container.startup()
        try:
            users = container.get_user_service()
            business = await users.register_user("business", "Acme", company="Acme")
            freelancer = await users.register_user("freelancer", "Fran", skills=["React"])
            business_actor = Actor(business.id, UserRole.BUSINESS)
            freelancer_actor = Actor(freelancer.id, UserRole.FREELANCER)

            job = await container.get_job_service().create_job(
                business_actor, "Dashboard", "Build a dashboard", 700, ["react", "d3"]
            )
            proposals = container.get_proposal_service()
            offer = await proposals.create_offer(job.id, freelancer.id, business.id)
            assert offer.proposed_rate == 700

            accepted = await proposals.update_proposal_status(offer.id, "approved", freelancer_actor)
            assert accepted.status == ProposalStatus.APPROVED

            with pytest.raises(ProposalFinalizedException):
                await proposals.update_proposal_status(offer.id, "rejected", business_actor)

            # No API key configured, so every score comes from skill overlap
            ranked = await container.get_job_service().recommend_freelancers(job.id, business_actor)
            assert [(c.freelancer.id, c.score, c.source) for c in ranked] == [
                (freelancer.id, 50, MatchSource.FALLBACK),
            ]
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_concurrent_decisions_finalize_once(self, sqlite_settings):
        """Racing approve and reject on one proposal commit exactly once"""
        container = ServiceContainer(settings=sqlite_settings, setup_logging=False)
        await container.startup()
        try:
            users = container.get_user_service()
            business = await users.register_user("business", "Acme", company="Acme")
            freelancer = await users.register_user("freelancer", "Fran", skills=["React"])
            job = await container.get_job_service().create_job(
                Actor(business.id, UserRole.BUSINESS), "Dashboard", "Build a dashboard", 700, ["react"]
            )
            proposals = container.get_proposal_service()
            application = await proposals.create_application(job.id, freelancer.id, "Hire me", 60)

            results = await asyncio.gather(
                proposals.update_proposal_status(
                    application.id, "approved", Actor(business.id, UserRole.BUSINESS)
                ),
                container.get_proposal_service().update_proposal_status(
                    application.id, "rejected", Actor(freelancer.id, UserRole.FREELANCER)
                ),
                return_exceptions=True,
            )

            successes = [r for r in results if not isinstance(r, Exception)]
            failures = [r for r in results if isinstance(r, Exception)]
            assert len(successes) == 1
            assert len(failures) == 1
            assert isinstance(failures[0], ProposalFinalizedException)

            stored = await proposals.get_proposal(application.id, Actor(business.id, UserRole.BUSINESS))
            assert stored.status == successes[0].status
        finally:
            await container.shutdown()
