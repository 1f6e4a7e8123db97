import datetime

import pytest
from sqlalchemy import func, select

from app.core.seeding import list_categories, seed_categories
from app.models import DailyCategoryStat, DailyLog, Habit, User, UserCategoryStat
from app.schemas.habit_schemas import HabitCreate, HabitUpdate
from application.services.habit_service import habit_service
from application.services.progress_service import progress_service
from application.services.stats_service import stats_service
from application.services.user_service import user_service
from domain.errors import InvalidState, NotFound
from domain.models.enums import CategoryKey, FrequencyType, TrackingMode
from domain.models.recurrence import MONDAY as MON_IDX
from domain.models.recurrence import WEDNESDAY as WED_IDX

TODAY = datetime.date(2025, 6, 10)  # Tuesday


@pytest.mark.asyncio
async def test_store_user_creates_once(db_session):
    user, created = await user_service.store_user(db_session, "tok_1", email="a@b.c", name="Ann")
    assert created is True
    assert user.is_onboarded is False

    again, created_again = await user_service.store_user(db_session, "tok_1", name="Ignored")
    assert created_again is False
    assert again.id == user.id
    assert again.name == "Ann"


@pytest.mark.asyncio
async def test_require_user_unknown_token(db_session):
    with pytest.raises(NotFound):
        await user_service.require_user(db_session, "nobody")


@pytest.mark.asyncio
async def test_complete_onboarding(db_session, user):
    updated = await user_service.complete_onboarding(db_session, user, "Get fit", "beginner")
    assert updated.goal == "Get fit"
    assert updated.is_onboarded is True


@pytest.mark.asyncio
async def test_lapsed_global_streak_reads_as_zero_but_is_kept(db_session, user):
    user.current_streak = 5
    user.best_streak = 5
    user.last_completed_date = TODAY - datetime.timedelta(days=3)
    await db_session.commit()

    view = user_service.current_user_view(user, TODAY)
    assert view.current_streak == 0
    assert view.best_streak == 5

    stored = await db_session.scalar(select(User.current_streak).where(User.id == user.id))
    assert stored == 5


@pytest.mark.asyncio
async def test_recent_global_streak_is_shown(db_session, user):
    user.current_streak = 4
    user.last_completed_date = TODAY - datetime.timedelta(days=1)
    await db_session.commit()

    assert user_service.current_user_view(user, TODAY).current_streak == 4


@pytest.mark.asyncio
async def test_create_habit_marks_user_onboarded(db_session, user):
    payload = HabitCreate(
        category_key=CategoryKey.MIND,
        title="Read",
        tracking_mode=TrackingMode.COUNT,
        target_value=10,
        count_unit="pages",
        frequency_type=FrequencyType.CUSTOM,
        custom_days=[WED_IDX, MON_IDX, MON_IDX],
    )
    habit = await habit_service.create(db_session, user, payload)

    assert habit.custom_days == [MON_IDX, WED_IDX]
    assert habit.current_streak == 0
    await db_session.refresh(user)
    assert user.is_onboarded is True


def test_habit_create_validation():
    with pytest.raises(ValueError):
        HabitCreate(category_key="health", title="Run", tracking_mode="duration")
    with pytest.raises(ValueError):
        HabitCreate(category_key="health", title="Run", frequency_type="custom", custom_days=[7])
    with pytest.raises(ValueError):
        HabitCreate(category_key="nope", title="Run")

    ok = HabitCreate.model_validate({"categoryKey": "health", "title": "Run", "trackingMode": "binary"})
    assert ok.target_value is None


@pytest.mark.asyncio
async def test_list_active_filters_and_orders(db_session, user, make_habit):
    await make_habit(title="Water")
    await make_habit(title="Paused", is_active=False)
    await make_habit(title="Code", category_key=CategoryKey.CAREER)

    everything = await habit_service.list_active(db_session, user.id, TODAY)
    assert sorted(h.title for h in everything) == ["Code", "Water"]

    career = await habit_service.list_active(db_session, user.id, TODAY, category_key="career")
    assert [h.title for h in career] == ["Code"]


@pytest.mark.asyncio
async def test_listed_habit_streak_respects_schedule(db_session, user, make_habit):
    # Mon/Wed habit last done Monday 06-09: still alive on Tuesday
    await make_habit(
        title="Alive",
        frequency_type=FrequencyType.CUSTOM,
        custom_days=[MON_IDX, WED_IDX],
        current_streak=3,
        best_streak=3,
        last_completed_date=datetime.date(2025, 6, 9),
    )
    # Daily habit last done two days ago: lapsed
    await make_habit(
        title="Lapsed",
        current_streak=7,
        best_streak=7,
        last_completed_date=TODAY - datetime.timedelta(days=2),
    )

    by_title = {h.title: h for h in await habit_service.list_active(db_session, user.id, TODAY)}
    assert by_title["Alive"].current_streak == 3
    assert by_title["Lapsed"].current_streak == 0
    assert by_title["Lapsed"].best_streak == 7

    stored = await db_session.scalar(select(Habit.current_streak).where(Habit.title == "Lapsed"))
    assert stored == 7


@pytest.mark.asyncio
async def test_edit_habit(db_session, user, make_habit):
    habit = await make_habit()

    edited = await habit_service.edit(
        db_session, user.id, habit.id, HabitUpdate(title="Drink more water", is_active=False)
    )
    assert edited.title == "Drink more water"
    assert edited.is_active is False
    assert edited.tracking_mode == TrackingMode.BINARY

    with pytest.raises(NotFound):
        await habit_service.edit(db_session, "someone_else", habit.id, HabitUpdate(title="x"))


@pytest.mark.asyncio
async def test_delete_habit_removes_logs_keeps_xp(db_session, user, make_habit):
    habit = await make_habit()
    day = datetime.date(2025, 6, 1)
    await progress_service.log_progress(db_session, user.id, habit.id, day, 1)
    await progress_service.log_progress(db_session, user.id, habit.id, day + datetime.timedelta(days=1), 1)

    removed = await habit_service.delete(db_session, user.id, habit.id)
    assert removed == 2

    assert await db_session.scalar(select(func.count()).select_from(Habit)) == 0
    assert await db_session.scalar(select(func.count()).select_from(DailyLog)) == 0
    assert await db_session.scalar(select(func.count()).select_from(DailyCategoryStat)) == 2
    assert await db_session.scalar(select(UserCategoryStat.total_xp)) == 200

    with pytest.raises(NotFound):
        await habit_service.delete(db_session, user.id, habit.id)


@pytest.mark.asyncio
async def test_analytics_history_window(db_session, user, make_habit):
    pages = await make_habit(title="Pages", tracking_mode=TrackingMode.COUNT, target_value=8)
    await progress_service.log_progress(db_session, user.id, pages.id, TODAY, 4)
    await progress_service.log_progress(db_session, user.id, pages.id, TODAY - datetime.timedelta(days=1), 20)
    # Outside a 7-day window
    await progress_service.log_progress(db_session, user.id, pages.id, TODAY - datetime.timedelta(days=7), 8)

    [read] = await habit_service.analytics(db_session, user.id, TODAY, window_days=7)

    assert len(read.history) == 7
    assert read.history[0].date == TODAY - datetime.timedelta(days=6)
    assert read.history[-1].date == TODAY
    assert read.history[-1].day == "10"
    assert read.history[-1].value == 50.0
    assert read.history[-2].value == 100.0
    assert all(point.value == 0.0 for point in read.history[:-2])


@pytest.mark.asyncio
async def test_stats_and_cards(db_session, user, make_habit):
    habit = await make_habit()
    await progress_service.log_progress(db_session, user.id, habit.id, TODAY, 1)
    lifetime = (await db_session.execute(select(UserCategoryStat))).scalars().one()
    lifetime.total_xp = 600
    await db_session.commit()

    stats = await stats_service.get_my_stats(db_session, user.id, TODAY)
    assert [s.category_key for s in stats] == list(CategoryKey)
    health = stats[0]
    assert health.total_xp == 600
    assert health.today_xp == 100
    assert health.stage_name == "Rise"
    assert stats[1].total_xp == 0
    assert stats[1].stage_name == "Seed"

    cards = await stats_service.get_all_cards(db_session, user.id)
    assert len(cards) == 20
    health_cards = [c for c in cards if c.category_key == CategoryKey.HEALTH]
    assert [c.is_unlocked for c in health_cards] == [True, True, False, False]
    assert [c.max_xp for c in health_cards] == [500, 1500, 3500, 1_000_000]


@pytest.mark.asyncio
async def test_seed_categories_is_repeatable(db_session):
    assert await seed_categories(db_session) == 5
    assert await seed_categories(db_session) == 0

    categories = await list_categories(db_session)
    assert [c.key for c in categories] == list(CategoryKey)
    assert categories[0].character_name == "Vita"


@pytest.mark.asyncio
async def test_edit_to_count_without_target_is_rejected(db_session, user, make_habit):
    habit = await make_habit()
    habit_id = habit.id

    with pytest.raises(InvalidState):
        await habit_service.edit(db_session, user.id, habit_id, HabitUpdate(tracking_mode=TrackingMode.COUNT))

    stored = await db_session.scalar(select(Habit.tracking_mode).where(Habit.id == habit_id))
    assert stored == TrackingMode.BINARY


@pytest.mark.asyncio
async def test_streaks_completed_on_clients_next_day_are_shown(db_session, user, make_habit):
    habit = await make_habit()
    client_day = TODAY + datetime.timedelta(days=1)
    await progress_service.log_progress(db_session, user.id, habit.id, client_day, 1)
    await db_session.refresh(user)

    # Server clock is still on TODAY
    assert user_service.current_user_view(user, TODAY).current_streak == 1
    [read] = await habit_service.list_active(db_session, user.id, TODAY)
    assert read.current_streak == 1
