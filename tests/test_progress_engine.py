"""
Check-in engine: log upsert, streaks and category XP in one transaction.
"""

import asyncio
import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.models import Base, DailyCategoryStat, DailyLog, Habit, User, UserCategoryStat
from application.services.progress_service import ProgressService, progress_service
from domain.errors import NotFound
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode
from domain.models.recurrence import MONDAY as MON_IDX
from domain.models.recurrence import WEDNESDAY as WED_IDX

# 2025-06-01 is a Sunday
D = datetime.date(2025, 6, 1)
MONDAY = datetime.date(2025, 6, 2)
WEDNESDAY = datetime.date(2025, 6, 4)
NEXT_MONDAY = datetime.date(2025, 6, 9)


async def _reload(session, model, id):
    await session.refresh(await session.get(model, id))
    return await session.get(model, id)


@pytest.mark.asyncio
async def test_end_to_end_count_habit(db_session, user, make_habit):
    habit = await make_habit(
        title="Read pages",
        tracking_mode=TrackingMode.COUNT,
        target_value=8,
        category_key=CategoryKey.MIND,
    )

    result = await progress_service.log_progress(db_session, user.id, habit.id, D, 8)

    assert result.is_completed is True
    assert result.new_daily_xp == 100
    assert result.total_category_xp == 100

    habit = await _reload(db_session, Habit, habit.id)
    assert habit.current_streak == 1
    assert habit.best_streak == 1
    assert habit.last_completed_date == D

    log = (await db_session.execute(select(DailyLog).where(DailyLog.habit_id == habit.id))).scalars().one()
    assert log.current_value == 8
    assert log.is_completed is True
    assert log.user_id == user.id


@pytest.mark.asyncio
async def test_below_target_is_logged_but_not_completed(db_session, user, make_habit):
    habit = await make_habit(tracking_mode=TrackingMode.COUNT, target_value=8)

    result = await progress_service.log_progress(db_session, user.id, habit.id, D, 5)

    assert result.is_completed is False
    assert result.new_daily_xp == 0
    habit = await _reload(db_session, Habit, habit.id)
    assert habit.current_streak == 0
    assert habit.last_completed_date is None


@pytest.mark.asyncio
async def test_relogging_completed_day_does_not_double_count(db_session, user, make_habit):
    habit = await make_habit(tracking_mode=TrackingMode.COUNT, target_value=8)

    await progress_service.log_progress(db_session, user.id, habit.id, D, 8)
    second = await progress_service.log_progress(db_session, user.id, habit.id, D, 10)

    habit = await _reload(db_session, Habit, habit.id)
    u = await _reload(db_session, User, user.id)
    assert habit.current_streak == 1
    assert u.current_streak == 1
    assert second.total_category_xp == 100

    count = await db_session.scalar(select(func.count()).select_from(DailyLog).where(DailyLog.habit_id == habit.id))
    assert count == 1


@pytest.mark.asyncio
async def test_daily_streak_continuity_and_reset(db_session, user, make_habit):
    steady = await make_habit(title="Steady")
    gappy = await make_habit(title="Gappy", category_key=CategoryKey.FUN)

    for offset in range(3):
        await progress_service.log_progress(db_session, user.id, steady.id, D + datetime.timedelta(days=offset), 1)

    await progress_service.log_progress(db_session, user.id, gappy.id, D, 1)
    await progress_service.log_progress(db_session, user.id, gappy.id, D + datetime.timedelta(days=2), 1)

    steady = await _reload(db_session, Habit, steady.id)
    gappy = await _reload(db_session, Habit, gappy.id)
    assert steady.current_streak == 3
    assert steady.best_streak == 3
    assert gappy.current_streak == 1
    assert gappy.best_streak == 1


@pytest.mark.asyncio
async def test_custom_day_streaks(db_session, user, make_habit):
    mon_wed = dict(frequency_type=FrequencyType.CUSTOM, custom_days=[MON_IDX, WED_IDX])
    on_schedule = await make_habit(title="Mon/Wed", **mon_wed)
    skipped_wed = await make_habit(title="Mon/Wed skipping", **mon_wed)
    mondays = await make_habit(title="Mondays", frequency_type=FrequencyType.CUSTOM, custom_days=[MON_IDX])

    await progress_service.log_progress(db_session, user.id, on_schedule.id, MONDAY, 1)
    await progress_service.log_progress(db_session, user.id, on_schedule.id, WEDNESDAY, 1)

    await progress_service.log_progress(db_session, user.id, skipped_wed.id, MONDAY, 1)
    await progress_service.log_progress(db_session, user.id, skipped_wed.id, NEXT_MONDAY, 1)

    await progress_service.log_progress(db_session, user.id, mondays.id, MONDAY, 1)
    await progress_service.log_progress(db_session, user.id, mondays.id, NEXT_MONDAY, 1)

    assert (await _reload(db_session, Habit, on_schedule.id)).current_streak == 2
    # Wednesday was due and missed
    assert (await _reload(db_session, Habit, skipped_wed.id)).current_streak == 1
    # Tuesday..Sunday are not due, so the previous Monday is adjacent
    assert (await _reload(db_session, Habit, mondays.id)).current_streak == 2


@pytest.mark.asyncio
async def test_global_streak_counts_days_not_habits(db_session, user, make_habit):
    water = await make_habit(title="Water")
    walk = await make_habit(title="Walk", category_key=CategoryKey.LIFE)

    await progress_service.log_progress(db_session, user.id, water.id, D, 1)
    await progress_service.log_progress(db_session, user.id, walk.id, D, 1)
    u = await _reload(db_session, User, user.id)
    assert u.current_streak == 1

    await progress_service.log_progress(db_session, user.id, walk.id, D + datetime.timedelta(days=1), 1)
    u = await _reload(db_session, User, user.id)
    assert u.current_streak == 2
    assert u.last_completed_date == D + datetime.timedelta(days=1)

    await progress_service.log_progress(db_session, user.id, water.id, D + datetime.timedelta(days=4), 1)
    u = await _reload(db_session, User, user.id)
    assert u.current_streak == 1
    assert u.best_streak == 2


@pytest.mark.asyncio
async def test_uncompleting_then_recompleting_same_day(db_session, user, make_habit):
    habit = await make_habit()

    await progress_service.log_progress(db_session, user.id, habit.id, D, 1)
    undone = await progress_service.log_progress(db_session, user.id, habit.id, D, 0)
    assert undone.new_daily_xp == 0
    assert undone.total_category_xp == 0

    redone = await progress_service.log_progress(db_session, user.id, habit.id, D, 1)
    assert redone.total_category_xp == 100

    # Back to completed on the same day: streak stays at 1
    habit = await _reload(db_session, Habit, habit.id)
    assert habit.current_streak == 1


@pytest.mark.asyncio
async def test_unknown_habit_raises_not_found_without_writes(db_session, user):
    with pytest.raises(NotFound):
        await progress_service.log_progress(db_session, user.id, "missing", D, 1)

    assert await db_session.scalar(select(func.count()).select_from(DailyLog)) == 0
    assert await db_session.scalar(select(func.count()).select_from(DailyCategoryStat)) == 0


@pytest.mark.asyncio
async def test_other_users_habit_is_not_found(db_session, user, make_habit):
    other = User(id="u_other", token_identifier="token_other", name="Other")
    db_session.add(other)
    await db_session.commit()
    habit = await make_habit(user_id=other.id)

    with pytest.raises(NotFound):
        await progress_service.log_progress(db_session, user.id, habit.id, D, 1)


@pytest.mark.asyncio
async def test_missing_user_rolls_back_log(db_session, make_habit):
    # Habit points at a user row that does not exist
    habit = await make_habit(user_id="ghost")
    habit_id = habit.id

    with pytest.raises(NotFound):
        await progress_service.log_progress(db_session, "ghost", habit_id, D, 1)

    assert await db_session.scalar(select(func.count()).select_from(DailyLog)) == 0
    habit = await _reload(db_session, Habit, habit_id)
    assert habit.current_streak == 0


@pytest.mark.asyncio
async def test_get_today_logs_is_scoped_to_caller(db_session, user, make_habit):
    other = User(id="u_other", token_identifier="token_other", name="Other")
    db_session.add(other)
    await db_session.commit()

    mine = await make_habit()
    theirs = await make_habit(user_id=other.id)
    await progress_service.log_progress(db_session, user.id, mine.id, D, 1)
    await progress_service.log_progress(db_session, other.id, theirs.id, D, 1)

    logs = await progress_service.get_today_logs(db_session, user.id, D)
    assert [log.habit_id for log in logs] == [mine.id]
    assert await progress_service.get_today_logs(db_session, user.id, D + datetime.timedelta(days=1)) == []


@pytest.mark.asyncio
async def test_concurrent_checkins_for_same_day_count_once(tmp_path):
    # Separate sessions on a shared file database
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as setup:
        setup.add(User(id="u_race", token_identifier="token_race", name="Racer"))
        setup.add(
            Habit(
                id="h_race",
                user_id="u_race",
                category_key=CategoryKey.HEALTH,
                title="Race",
                tracking_mode=TrackingMode.BINARY,
                frequency_type=FrequencyType.DAILY,
            )
        )
        await setup.commit()

    service = ProgressService()

    async def check_in():
        async with factory() as session:
            return await service.log_progress(session, "u_race", "h_race", D, 1)

    results = await asyncio.gather(check_in(), check_in())
    assert [r.total_category_xp for r in results] == [100, 100]

    async with factory() as verify:
        habit = await verify.get(Habit, "h_race")
        user = await verify.get(User, "u_race")
        lifetime = (await verify.execute(select(UserCategoryStat))).scalars().one()
        assert habit.current_streak == 1
        assert user.current_streak == 1
        assert lifetime.total_xp == 100

    assert len(service._user_locks) == 0
    await engine.dispose()


@pytest.mark.asyncio
async def test_user_locks_are_released_after_check_in(db_session, user, make_habit):
    service = ProgressService()
    held = service._get_lock("u_other")
    assert service._get_lock("u_other") is held

    habit = await make_habit()
    await service.log_progress(db_session, user.id, habit.id, D, 1)

    assert user.id not in service._user_locks
    assert "u_other" in service._user_locks
    del held
    assert "u_other" not in service._user_locks
