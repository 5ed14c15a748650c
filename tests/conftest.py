"""Pytest fixtures for ResumeVault tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from resumevault.domain.entities import (
    Generation,
    Resume,
    ResumeVersion,
    ResumeVersionSummary,
)
from resumevault.domain.exceptions import NotFound, VersionConflict
from resumevault.domain.value_objects import ChangeType


# --- Shared in-memory store ---


class InMemoryStore:
    """State shared by every FakeUnitOfWork created from one factory.

    ``read_hook`` runs on every resume read, so tests can line concurrent
    writers up. ``cas_failures`` makes that many advance_version calls lose
    their compare-and-swap.
    """

    def __init__(self) -> None:
        self.resumes: dict[UUID, Resume] = {}
        self.versions: dict[tuple[UUID, int], ResumeVersion] = {}
        self.generations: dict[UUID, Generation] = {}
        self.read_hook: Callable[[], Awaitable[None]] | None = None
        self.cas_failures = 0

    def seed(
        self,
        data: dict,
        *,
        meta_code: str = "SWE",
        title: str = "Jane Doe – SWE",
    ) -> Resume:
        """Insert a resume at v1 with its first version."""
        now = datetime.now(UTC)
        resume = Resume(
            id=uuid4(),
            meta_code=meta_code,
            title=title,
            data=copy.deepcopy(data),
            current_version=1,
            created_at=now,
            updated_at=now,
        )
        self.resumes[resume.id] = resume
        self.versions[(resume.id, 1)] = ResumeVersion(
            resume_id=resume.id,
            version_number=1,
            data=copy.deepcopy(data),
            changed_sections=tuple(data),
            change_summary="Initial version",
            change_type=ChangeType.EDIT,
            created_at=now,
        )
        return resume

    def version_numbers(self, resume_id: UUID) -> list[int]:
        return sorted(n for (rid, n) in self.versions if rid == resume_id)


# --- Fake repositories ---


class FakeResumeRepository:
    """In-memory resume repository with compare-and-swap on current_version."""

    def __init__(self, store: InMemoryStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    def _put(self, resume: Resume) -> Resume:
        previous = self._store.resumes.get(resume.id)
        self._store.resumes[resume.id] = resume
        if previous is None:
            self._undo.append(lambda: self._store.resumes.pop(resume.id, None))
        else:
            self._undo.append(lambda: self._store.resumes.__setitem__(resume.id, previous))
        return copy.deepcopy(resume)

    async def get_by_id(self, resume_id: UUID) -> Resume | None:
        resume = self._store.resumes.get(resume_id)
        snapshot = copy.deepcopy(resume) if resume else None
        if self._store.read_hook:
            await self._store.read_hook()
        return snapshot

    async def get_by_meta_code(self, meta_code: str) -> Resume | None:
        matches = [r for r in self._store.resumes.values() if r.meta_code == meta_code]
        if not matches:
            return None
        return copy.deepcopy(max(matches, key=lambda r: r.updated_at))

    async def list(
        self,
        *,
        meta_code: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Resume], str | None]:
        items = [
            r
            for r in self._store.resumes.values()
            if not meta_code or r.meta_code == meta_code
        ]
        items.sort(key=lambda r: r.id)
        if cursor:
            cursor_uuid = UUID(cursor)
            items = [r for r in items if r.id > cursor_uuid]
        page = items[: limit + 1]
        next_cursor = str(page[limit - 1].id) if len(page) > limit else None
        return ([copy.deepcopy(r) for r in page[:limit]], next_cursor)

    async def create(self, resume: Resume) -> Resume:
        self._put(copy.deepcopy(resume))
        return resume

    async def advance_version(
        self,
        resume_id: UUID,
        *,
        expected_version: int,
        data: dict,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume:
        current = self._store.resumes.get(resume_id)
        if self._store.cas_failures > 0:
            self._store.cas_failures -= 1
            raise VersionConflict(resume_id, expected_version + 1)
        if not current or current.current_version != expected_version:
            raise VersionConflict(resume_id, expected_version + 1)
        return self._put(
            replace(
                current,
                data=copy.deepcopy(data),
                current_version=expected_version + 1,
                title=title or current.title,
                meta_code=meta_code or current.meta_code,
                updated_at=updated_at,
            )
        )

    async def update_details(
        self,
        resume_id: UUID,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None:
        current = self._store.resumes.get(resume_id)
        if not current:
            return None
        return self._put(
            replace(
                current,
                title=title or current.title,
                meta_code=meta_code or current.meta_code,
                updated_at=updated_at,
            )
        )

    async def merge_sections(
        self,
        resume_id: UUID,
        patches: dict,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None:
        current = self._store.resumes.get(resume_id)
        if not current:
            return None
        return self._put(
            replace(
                current,
                data={**current.data, **copy.deepcopy(patches)},
                title=title or current.title,
                meta_code=meta_code or current.meta_code,
                updated_at=updated_at,
            )
        )

    async def delete(self, resume_id: UUID) -> None:
        self._store.resumes.pop(resume_id, None)
        for key in [k for k in self._store.versions if k[0] == resume_id]:
            del self._store.versions[key]
        for gid in [g.id for g in self._store.generations.values() if g.resume_id == resume_id]:
            del self._store.generations[gid]


class FakeResumeVersionRepository:
    """In-memory version log enforcing the (resume_id, version_number) key."""

    def __init__(self, store: InMemoryStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def append(self, version: ResumeVersion) -> ResumeVersion:
        key = (version.resume_id, version.version_number)
        if key in self._store.versions:
            raise VersionConflict(version.resume_id, version.version_number)
        if version.resume_id not in self._store.resumes:
            raise NotFound("Resume", str(version.resume_id))
        self._store.versions[key] = replace(version, data=copy.deepcopy(version.data))
        self._undo.append(lambda: self._store.versions.pop(key, None))
        return version

    async def get(self, resume_id: UUID, version_number: int) -> ResumeVersion | None:
        version = self._store.versions.get((resume_id, version_number))
        return replace(version, data=copy.deepcopy(version.data)) if version else None

    async def list(self, resume_id: UUID) -> list[ResumeVersionSummary]:
        items = [v for (rid, _), v in self._store.versions.items() if rid == resume_id]
        items.sort(key=lambda v: v.version_number, reverse=True)
        return [
            ResumeVersionSummary(
                resume_id=v.resume_id,
                version_number=v.version_number,
                changed_sections=v.changed_sections,
                change_summary=v.change_summary,
                change_type=v.change_type,
                created_at=v.created_at,
            )
            for v in items
        ]


class FakeGenerationRepository:
    """In-memory generation repository."""

    def __init__(self, store: InMemoryStore, undo: list) -> None:
        self._store = store
        self._undo = undo

    async def get_by_id(self, generation_id: UUID) -> Generation | None:
        job = self._store.generations.get(generation_id)
        return replace(job, resume_data=None) if job else None

    async def list(
        self,
        *,
        resume_id: UUID | None = None,
        limit: int = 50,
    ) -> list[Generation]:
        items = [
            g
            for g in self._store.generations.values()
            if resume_id is None or g.resume_id == resume_id
        ]
        items.sort(key=lambda g: g.created_at, reverse=True)
        return [replace(g, resume_data=None) for g in items[:limit]]

    async def create(self, generation: Generation) -> Generation:
        self._store.generations[generation.id] = generation
        self._undo.append(lambda: self._store.generations.pop(generation.id, None))
        return generation


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work; rollback undoes this unit's writes."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()
        self._undo: list = []
        self.resumes = FakeResumeRepository(self.store, self._undo)
        self.versions = FakeResumeVersionRepository(self.store, self._undo)
        self.generations = FakeGenerationRepository(self.store, self._undo)
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self._undo.clear()
        self.committed = True

    async def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()
        self.rolled_back = True


def make_uow_factory(store: InMemoryStore):
    """Factory with the same commit/rollback contract as the Postgres one."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory store for each test."""
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    """Factory returning async context manager with FakeUnitOfWork over ``store``."""
    return make_uow_factory(store)


@pytest.fixture
def resume_data() -> dict:
    """A small but complete resume payload."""
    return {
        "meta": {"code": "SWE"},
        "basics": {"name": {"full": "Jane Doe"}, "email": "jane@example.com"},
        "work": [{"company": "Acme", "position": "Engineer"}],
        "skills": ["python", "sql"],
        "education": [],
        "projects": [],
    }
