"""Concurrent writers against one resume."""

import asyncio

import pytest

from resumevault.application.services import ResumeAggregate, RollbackCoordinator
from resumevault.domain.exceptions import VersionConflict

from tests.conftest import InMemoryStore


def _line_up_first_reads(store: InMemoryStore, parties: int = 2) -> None:
    """Make the first ``parties`` resume reads wait for each other."""
    barrier = asyncio.Barrier(parties)
    reads = 0

    async def hook() -> None:
        nonlocal reads
        reads += 1
        if reads <= parties:
            await barrier.wait()

    store.read_hook = hook


@pytest.mark.asyncio
async def test_two_replaces_from_same_base_produce_gapless_history(
    store: InMemoryStore, uow_factory, resume_data
) -> None:
    """Both writers read v1; one commits v2, the other retries and lands v3."""
    resume = store.seed(resume_data)
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory)
    _line_up_first_reads(store)

    first, second = await asyncio.gather(
        aggregate.replace(resume.id, {**resume_data, "skills": ["a"]}),
        aggregate.replace(resume.id, {**resume_data, "skills": ["b"]}),
    )

    assert sorted([first.new_version, second.new_version]) == [2, 3]
    assert store.version_numbers(resume.id) == [1, 2, 3]
    assert store.resumes[resume.id].current_version == 3
    latest = store.versions[(resume.id, 3)].data
    assert store.resumes[resume.id].data == latest


@pytest.mark.asyncio
async def test_conflict_surfaces_when_retries_exhausted(
    store: InMemoryStore, uow_factory, resume_data
) -> None:
    resume = store.seed(resume_data)
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory, max_attempts=1)
    _line_up_first_reads(store)

    results = await asyncio.gather(
        aggregate.replace(resume.id, {**resume_data, "skills": ["a"]}),
        aggregate.replace(resume.id, {**resume_data, "skills": ["b"]}),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, VersionConflict)]
    assert len(conflicts) == 1
    assert conflicts[0].version_number == 2
    assert store.version_numbers(resume.id) == [1, 2]
    assert store.resumes[resume.id].current_version == 2


@pytest.mark.asyncio
async def test_replace_racing_rollback(store: InMemoryStore, uow_factory, resume_data) -> None:
    resume = store.seed(resume_data)
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory)
    await aggregate.replace(resume.id, {**resume_data, "work": []})
    _line_up_first_reads(store)

    await asyncio.gather(
        aggregate.replace(resume.id, {**resume_data, "skills": ["z"]}),
        RollbackCoordinator(aggregate).rollback(resume.id, 1),
    )

    assert store.version_numbers(resume.id) == [1, 2, 3, 4]
    assert store.resumes[resume.id].current_version == 4


@pytest.mark.asyncio
async def test_lost_pointer_swap_rolls_back_appended_version(
    store: InMemoryStore, uow_factory, resume_data
) -> None:
    """A failed compare-and-swap leaves no orphan version behind."""
    resume = store.seed(resume_data)
    store.cas_failures = 1
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory, max_attempts=1)

    with pytest.raises(VersionConflict):
        await aggregate.replace(resume.id, {**resume_data, "skills": []})

    assert store.version_numbers(resume.id) == [1]
    assert store.resumes[resume.id].current_version == 1


@pytest.mark.asyncio
async def test_lost_pointer_swap_is_retried(
    store: InMemoryStore, uow_factory, resume_data
) -> None:
    resume = store.seed(resume_data)
    store.cas_failures = 2
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory, max_attempts=3)

    result = await aggregate.replace(resume.id, {**resume_data, "skills": []})

    assert result.new_version == 2
    assert store.version_numbers(resume.id) == [1, 2]


@pytest.mark.asyncio
async def test_many_concurrent_writers(store: InMemoryStore, uow_factory, resume_data) -> None:
    resume = store.seed(resume_data)
    aggregate = ResumeAggregate(unit_of_work_factory=uow_factory, max_attempts=10)
    _line_up_first_reads(store, parties=5)

    await asyncio.gather(
        *(
            aggregate.replace(resume.id, {**resume_data, "skills": [f"s{i}"]})
            for i in range(5)
        )
    )

    assert store.version_numbers(resume.id) == [1, 2, 3, 4, 5, 6]
    assert store.resumes[resume.id].current_version == 6
