"""
Pytest configuration and shared fixtures.

Services are exercised against an in-memory unit of work so the lifecycle
rules can be tested without a database.
"""
import asyncio
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from application.repositories.interfaces import (
    IJobRepository,
    IProposalRepository,
    IUnitOfWork,
    IUserRepository,
)
from application.services.proposals import ProposalLifecycleService, ProposalLockRegistry
from domain.entities import Job, Proposal, User
from domain.enums import JobStatus, UserRole
from domain.value_objects import Actor, ProposalStatus, SkillSet


class InMemoryStore:
    """Shared tables behind the fake repositories"""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.jobs: Dict[int, Job] = {}
        self.proposals: Dict[int, Proposal] = {}
        self._next_id = 1

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_user(self, role: UserRole, name: str, **fields) -> User:
        user = User(id=self.next_id(), role=role, display_name=name, **fields)
        self.users[user.id] = user
        return user

    def add_job(self, business: User, budget: int = 500, skills=("react",), **fields) -> Job:
        job = Job(
            id=self.next_id(),
            title=fields.pop("title", "Build a dashboard"),
            description=fields.pop("description", "React dashboard for sales data"),
            budget=budget,
            business_id=business.id,
            skills=SkillSet.of(skills),
            **fields,
        )
        self.jobs[job.id] = job
        return job

    def add_proposal(self, job: Job, freelancer: User, status: ProposalStatus, **fields) -> Proposal:
        proposal = Proposal(
            id=self.next_id(),
            job_id=job.id,
            freelancer_id=freelancer.id,
            cover_letter=fields.pop("cover_letter", "I can do this"),
            proposed_rate=fields.pop("proposed_rate", 40),
            status=status,
            **fields,
        )
        self.proposals[proposal.id] = proposal
        return proposal


class InMemoryUserRepository(IUserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    async def list_by_role(self, role: UserRole) -> List[User]:
        return [u for _, u in sorted(self.store.users.items()) if u.role == role]

    async def create(self, user: User) -> User:
        created = replace(user, id=self.store.next_id())
        self.store.users[created.id] = created
        return created

    async def update(self, user: User) -> User:
        self.store.users[user.id] = user
        return user


class InMemoryJobRepository(IJobRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, job_id: int) -> Optional[Job]:
        return self.store.jobs.get(job_id)

    async def list_jobs(self, status=None, business_id=None) -> List[Job]:
        return [
            j for _, j in sorted(self.store.jobs.items())
            if (status is None or j.status == status)
            and (business_id is None or j.business_id == business_id)
        ]

    async def create(self, job: Job) -> Job:
        created = replace(job, id=self.store.next_id())
        self.store.jobs[created.id] = created
        return created

    async def update(self, job: Job) -> Job:
        self.store.jobs[job.id] = job
        return job


class InMemoryProposalRepository(IProposalRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, proposal_id: int) -> Optional[Proposal]:
        return self.store.proposals.get(proposal_id)

    async def get_for_update(self, proposal_id: int) -> Optional[Proposal]:
        # Yield to the loop so concurrent callers interleave here
        await asyncio.sleep(0)
        return self.store.proposals.get(proposal_id)

    async def list_by_job(self, job_id: int) -> List[Proposal]:
        return [p for _, p in sorted(self.store.proposals.items()) if p.job_id == job_id]

    async def list_by_freelancer(self, freelancer_id: int) -> List[Proposal]:
        return [p for _, p in sorted(self.store.proposals.items()) if p.freelancer_id == freelancer_id]

    async def create(self, proposal: Proposal) -> Proposal:
        created = replace(proposal, id=self.store.next_id())
        self.store.proposals[created.id] = created
        return created

    async def update(self, proposal: Proposal) -> Proposal:
        await asyncio.sleep(0)
        self.store.proposals[proposal.id] = proposal
        return proposal

    async def delete(self, proposal_id: int) -> bool:
        return self.store.proposals.pop(proposal_id, None) is not None


class InMemoryUnitOfWork(IUnitOfWork):
    def __init__(self, store: InMemoryStore):
        self.users = InMemoryUserRepository(store)
        self.jobs = InMemoryJobRepository(store)
        self.proposals = InMemoryProposalRepository(store)

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Deterministic clock advancing one second per call"""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def lifecycle(uow_factory, clock) -> ProposalLifecycleService:
    return ProposalLifecycleService(uow_factory, locks=ProposalLockRegistry(), clock=clock)


@pytest.fixture
def business(store) -> User:
    return store.add_user(UserRole.BUSINESS, "Acme Corp", company="Acme")


@pytest.fixture
def other_business(store) -> User:
    return store.add_user(UserRole.BUSINESS, "Globex", company="Globex")


@pytest.fixture
def freelancer(store) -> User:
    return store.add_user(
        UserRole.FREELANCER,
        "Fran Lancer",
        bio="React developer",
        skills=SkillSet.of(["react", "typescript"]),
        hourly_rate=45,
    )


@pytest.fixture
def other_freelancer(store) -> User:
    return store.add_user(UserRole.FREELANCER, "Sam Coder", skills=SkillSet.of(["python"]))


@pytest.fixture
def job(store, business) -> Job:
    return store.add_job(business, budget=500, skills=("react",))


@pytest.fixture
def business_actor(business) -> Actor:
    return Actor(business.id, UserRole.BUSINESS)


@pytest.fixture
def freelancer_actor(freelancer) -> Actor:
    return Actor(freelancer.id, UserRole.FREELANCER)


@pytest.fixture
def closed_job(store, business) -> Job:
    return store.add_job(business, status=JobStatus.CLOSED, title="Old gig")
