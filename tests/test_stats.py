import json
from datetime import date, datetime, timedelta, timezone

from study_buddy.db.interfaces import InMemoryKeyValueStore
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.schemas.study import StudySession
from study_buddy.services.stats import STATS_KEY, StatsTracker

from tests.conftest import START, FailingStore, FixedClock, FlakyStore

TODAY = START.date()


def session(studied, correct):
    return StudySession(cards_studied=studied, correct_answers=correct, date=START)


async def test_defaults_when_nothing_stored(tracker, store):
    stats = await tracker.refresh()

    assert stats.total_cards == 3
    assert stats.studied_today == 0
    assert stats.correct_answers == 0
    assert stats.streak_days == 1
    assert stats.last_study_date == TODAY

    persisted = json.loads(await store.get(STATS_KEY))
    assert persisted["totalCards"] == 3
    assert persisted["lastStudyDate"] == TODAY.isoformat()


async def test_same_day_keeps_daily_counter(tracker, clock):
    await tracker.apply_session_result(session(4, 3))
    clock.advance(hours=5)

    stats = await tracker.refresh()

    assert stats.studied_today == 4
    assert stats.correct_answers == 3


async def test_new_day_resets_daily_counter_only(tracker, clock):
    await tracker.apply_session_result(session(4, 3))
    clock.advance(days=1)

    stats = await tracker.refresh()

    assert stats.studied_today == 0
    assert stats.correct_answers == 3
    assert stats.last_study_date == TODAY + timedelta(days=1)


async def test_total_cards_follows_repository(tracker, repo):
    await repo.reset_all()
    assert (await tracker.refresh()).total_cards == 0


async def test_session_result_is_persisted(tracker, store, repo, clock):
    await tracker.apply_session_result(session(3, 2))

    reloaded = await StatsTracker(store, repo, clock=clock).refresh()

    assert reloaded.studied_today == 3
    assert reloaded.correct_answers == 2


class TestStreak:
    async def test_first_session_starts_streak(self, tracker):
        stats = await tracker.apply_session_result(session(1, 1))
        assert stats.streak_days == 1
        assert stats.last_active_date == TODAY

    async def test_second_session_same_day_keeps_streak(self, tracker):
        await tracker.apply_session_result(session(1, 1))
        stats = await tracker.apply_session_result(session(2, 0))
        assert stats.streak_days == 1
        assert stats.studied_today == 3

    async def test_consecutive_days_extend_streak(self, tracker, clock):
        for _ in range(3):
            stats = await tracker.apply_session_result(session(1, 1))
            clock.advance(days=1)
        assert stats.streak_days == 3

    async def test_missed_day_breaks_streak(self, tracker, clock):
        await tracker.apply_session_result(session(1, 1))
        clock.advance(days=1)
        await tracker.apply_session_result(session(1, 1))
        clock.advance(days=2)

        assert (await tracker.refresh()).streak_days == 0
        assert (await tracker.apply_session_result(session(1, 0))).streak_days == 1


async def test_reads_browser_date_strings(repo, clock):
    legacy = {
        "totalCards": 7,
        "studiedToday": 5,
        "correctAnswers": 4,
        "streakDays": 1,
        "lastStudyDate": "Sun Oct 18 2026",
    }
    store = InMemoryKeyValueStore({STATS_KEY: json.dumps(legacy)})

    stats = await StatsTracker(store, repo, clock=clock).refresh()

    assert stats.studied_today == 0
    assert stats.correct_answers == 4
    assert stats.total_cards == 3
    assert stats.last_study_date == date(2026, 10, 19)


async def test_malformed_stats_fall_back_to_defaults(repo, clock):
    store = InMemoryKeyValueStore({STATS_KEY: "{broken"})
    stats = await StatsTracker(store, repo, clock=clock).refresh()
    assert stats.correct_answers == 0
    assert stats.streak_days == 1


async def test_store_failure_falls_back_to_defaults(clock):
    repo = FlashcardsRepository(FailingStore())
    stats = await StatsTracker(FailingStore(), repo, clock=clock).refresh()
    assert stats.total_cards == 0
    assert stats.last_study_date == TODAY


async def test_partial_blob_keeps_known_fields(repo, clock):
    partial = {"totalCards": 3, "studiedToday": 2, "correctAnswers": 9, "streakDays": 4}
    store = InMemoryKeyValueStore({STATS_KEY: json.dumps(partial)})

    stats = await StatsTracker(store, repo, clock=clock).refresh()

    assert stats.correct_answers == 9
    assert stats.streak_days == 4
    # no stored date means a new day
    assert stats.studied_today == 0
    assert stats.last_study_date == TODAY


class TestUnreadableStore:
    stored = {
        "totalCards": 3,
        "studiedToday": 0,
        "correctAnswers": 40,
        "streakDays": 6,
        "lastStudyDate": TODAY.isoformat(),
        "lastActiveDate": TODAY.isoformat(),
    }

    async def test_refresh_does_not_overwrite(self, repo, clock):
        store = FlakyStore({STATS_KEY: json.dumps(self.stored)})
        tracker = StatsTracker(store, repo, clock=clock)

        assert (await tracker.refresh()).correct_answers == 0
        assert json.loads(await store.get(STATS_KEY))["correctAnswers"] == 40
        assert (await tracker.refresh()).correct_answers == 40

    async def test_session_result_does_not_overwrite(self, repo, clock):
        store = FlakyStore({STATS_KEY: json.dumps(self.stored)})
        tracker = StatsTracker(store, repo, clock=clock)

        await tracker.apply_session_result(session(2, 1))

        stats = await tracker.refresh()
        assert stats.correct_answers == 40
        assert stats.streak_days == 6


async def test_day_follows_clock_zone(repo):
    # 23:30 on the 19th in UTC-5 is already the 20th in UTC
    evening = datetime(2026, 10, 19, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    store = InMemoryKeyValueStore()

    stats = await StatsTracker(store, repo, clock=FixedClock(evening)).refresh()

    assert stats.last_study_date == date(2026, 10, 19)
