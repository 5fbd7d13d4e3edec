"""评分提交测试"""

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hackjudge.judging import (
    NotFoundError,
    ScoreValidationError,
    get_existing_scores,
    submit_scores,
)
from hackjudge.models.database import (
    Base,
    Competition,
    Criterion,
    Entry,
    Judge,
    JudgeFeedback,
    Score,
    Team,
)


async def _score_rows(db, entry_id, judge_id):
    result = await db.execute(
        select(Score.criterion_id, Score.value)
        .where(Score.entry_id == entry_id, Score.judge_id == judge_id)
        .order_by(Score.criterion_id)
    )
    return dict(result.all())


async def test_first_submission_inserts_scores(db, hackathon):
    result = await submit_scores(
        db,
        hackathon.rocket,
        hackathon.j1,
        {hackathon.innovation: 8, hackathon.technical: 6},
    )
    
    assert result.created == sorted([hackathon.innovation, hackathon.technical])
    assert result.updated == []
    assert result.scored_criteria == 2
    assert result.total_criteria == 2
    assert result.is_complete is True
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {
        hackathon.innovation: 8.0,
        hackathon.technical: 6.0,
    }


async def test_resubmission_updates_in_place(db, hackathon):
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 8, hackathon.technical: 6})
    result = await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 9, hackathon.technical: 5})
    
    assert result.created == []
    assert result.updated == sorted([hackathon.innovation, hackathon.technical])
    
    count = await db.execute(select(func.count()).select_from(Score))
    assert count.scalar_one() == 2
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {
        hackathon.innovation: 9.0,
        hackathon.technical: 5.0,
    }


async def test_identical_submission_twice_is_idempotent(db, hackathon):
    payload = {hackathon.innovation: 7, hackathon.technical: 7}
    await submit_scores(db, hackathon.rocket, hackathon.j1, payload)
    first = await _score_rows(db, hackathon.rocket, hackathon.j1)
    
    await submit_scores(db, hackathon.rocket, hackathon.j1, payload)
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == first
    count = await db.execute(select(func.count()).select_from(Score))
    assert count.scalar_one() == 2


async def test_partial_submissions_preserve_untouched_criteria(db, hackathon):
    first = await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 4})
    assert first.is_complete is False
    assert first.scored_criteria == 1
    
    second = await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.technical: 9})
    
    assert second.is_complete is True
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {
        hackathon.innovation: 4.0,
        hackathon.technical: 9.0,
    }


async def test_empty_values_are_ignored(db, hackathon):
    result = await submit_scores(
        db,
        hackathon.rocket,
        hackathon.j1,
        {hackathon.innovation: 5, hackathon.technical: None},
    )
    
    assert result.created == [hackathon.innovation]
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {hackathon.innovation: 5.0}


@pytest.mark.parametrize("scores", [{}, "all-empty"])
async def test_submission_without_scores_is_rejected(db, hackathon, scores):
    if scores == "all-empty":
        scores = {hackathon.innovation: None, hackathon.technical: None}
    
    with pytest.raises(ScoreValidationError):
        await submit_scores(db, hackathon.rocket, hackathon.j1, scores)
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {}


@pytest.mark.parametrize("bad_value", [11, -1, 10.5, float("nan"), float("inf")])
async def test_out_of_range_value_rejects_whole_batch(db, hackathon, bad_value):
    with pytest.raises(ScoreValidationError):
        await submit_scores(
            db,
            hackathon.rocket,
            hackathon.j1,
            {hackathon.innovation: 5, hackathon.technical: bad_value},
        )
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {}


async def test_boundary_values_are_accepted(db, hackathon):
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 0, hackathon.technical: 10})
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {
        hackathon.innovation: 0.0,
        hackathon.technical: 10.0,
    }


async def test_unknown_criterion_is_rejected(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 5, 9999: 3})
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {}


async def test_criterion_from_other_competition_is_rejected(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.foreign_criterion: 3})


async def test_judge_from_other_competition_is_rejected(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.rocket, hackathon.outsider, {hackathon.innovation: 3})


async def test_missing_entry_and_judge_are_rejected(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, 9999, hackathon.j1, {hackathon.innovation: 3})
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.rocket, 9999, {hackathon.innovation: 3})


async def test_unsubmitted_entry_cannot_be_scored(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.draft, hackathon.j1, {hackathon.innovation: 3})


async def test_feedback_is_one_record_per_entry_and_judge(db, hackathon):
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 5}, feedback="Great idea")
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.technical: 6})
    
    existing = await get_existing_scores(db, hackathon.rocket, hackathon.j1)
    assert existing.feedback == "Great idea"
    
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.technical: 7}, feedback="Needs tests")
    
    existing = await get_existing_scores(db, hackathon.rocket, hackathon.j1)
    assert existing.feedback == "Needs tests"
    assert existing.scores == {hackathon.innovation: 5.0, hackathon.technical: 7.0}
    
    count = await db.execute(select(func.count()).select_from(JudgeFeedback))
    assert count.scalar_one() == 1


async def test_empty_feedback_clears_it(db, hackathon):
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 5}, feedback="Great idea")
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 5}, feedback="  ")
    
    existing = await get_existing_scores(db, hackathon.rocket, hackathon.j1)
    assert existing.feedback is None


async def test_judges_do_not_overwrite_each_other(db, hackathon):
    await submit_scores(db, hackathon.rocket, hackathon.j1, {hackathon.innovation: 8})
    await submit_scores(db, hackathon.rocket, hackathon.j2, {hackathon.innovation: 2})
    
    assert await _score_rows(db, hackathon.rocket, hackathon.j1) == {hackathon.innovation: 8.0}
    assert await _score_rows(db, hackathon.rocket, hackathon.j2) == {hackathon.innovation: 2.0}


async def test_inactive_judge_cannot_submit(db, hackathon):
    with pytest.raises(NotFoundError):
        await submit_scores(db, hackathon.rocket, hackathon.retired, {hackathon.innovation: 3})


async def test_concurrent_resubmissions_leave_one_row(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'concurrent.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    
    async with factory() as db:
        competition = Competition(name="Concurrent Cup")
        db.add(competition)
        await db.flush()
        team = Team(competition_id=competition.id, name="Omega")
        criterion = Criterion(competition_id=competition.id, name="Innovation", weight=1, max_score=10)
        db.add_all([team, criterion])
        await db.flush()
        entry = Entry(competition_id=competition.id, team_id=team.id, title="Omega", is_submitted=True)
        judge = Judge(user_id="user-7", competition_id=competition.id)
        db.add_all([entry, judge])
        await db.commit()
        entry_id, judge_id, criterion_id = entry.id, judge.id, criterion.id
    
    values = list(range(10))
    
    async def submit(value):
        async with factory() as session:
            await submit_scores(session, entry_id, judge_id, {criterion_id: value})
    
    try:
        await asyncio.gather(*(submit(value) for value in values))
        
        async with factory() as db:
            result = await db.execute(
                select(Score.value).where(
                    Score.entry_id == entry_id,
                    Score.judge_id == judge_id,
                    Score.criterion_id == criterion_id,
                )
            )
            stored = result.scalars().all()
    finally:
        await engine.dispose()
    
    assert len(stored) == 1
    assert stored[0] in values
