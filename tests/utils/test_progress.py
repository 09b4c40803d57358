import json
from pathlib import Path

from carmines_quest.loop import GameLoop
from carmines_quest.progress import (
    PROGRESS_KEY,
    Achievement,
    Progress,
    ProgressStore,
    best_times_ranking,
    complete_level,
    from_dict,
    is_level_unlocked,
    load_progress,
    reset_progress,
    save_progress,
    to_dict,
    update_settings,
)
from carmines_quest.types import Difficulty, SessionStatus
from tests.test_utils import make_grid, make_level


def test_first_completion() -> None:
    progress = complete_level(
        Progress(), level=1, time_remaining=22, hints_used=0, time_budget=30
    )
    stats = progress.stats
    assert list(progress.completed_levels) == [1]
    assert stats.total_deliveries == 1
    assert stats.total_time == 8
    assert stats.best_times[1] == 22
    assert stats.perfect_runs == 1
    assert list(stats.achievements) == [
        Achievement.FIRST_DELIVERY,
        Achievement.NO_HINTS,
    ]


def test_repeat_keeps_best_time_and_unique_levels() -> None:
    progress = complete_level(Progress(), 2, 10, 2, 30)
    progress = complete_level(progress, 2, 26, 1, 30)
    progress = complete_level(progress, 2, 15, 0, 30)

    stats = progress.stats
    assert list(progress.completed_levels) == [2]
    assert stats.total_deliveries == 3
    assert stats.best_times[2] == 26
    assert stats.hints_used == 3
    assert stats.perfect_runs == 0
    assert list(stats.achievements) == [
        Achievement.SPEED_DEMON,
        Achievement.NO_HINTS,
    ]


def test_all_levels_achievement() -> None:
    progress = Progress()
    for level in range(1, 9):
        progress = complete_level(progress, level, 5, 1, 30)
        if level < 8:
            assert Achievement.ALL_LEVELS not in progress.stats.achievements
    assert Achievement.ALL_LEVELS in progress.stats.achievements


def test_settings_update_and_reset() -> None:
    progress = complete_level(Progress(), 1, 20, 0, 30)
    progress = update_settings(progress, difficulty=Difficulty.HARD, show_grid=False)

    cleared = reset_progress(progress)

    assert list(cleared.completed_levels) == []
    assert cleared.stats.total_deliveries == 0
    assert cleared.settings.difficulty is Difficulty.HARD
    assert cleared.settings.show_grid is False


def test_dict_layout_uses_camel_case() -> None:
    progress = complete_level(Progress(), 3, 12, 1, 30)
    data = to_dict(progress)
    assert data["completedLevels"] == [3]
    assert data["gameStats"]["bestTimes"] == {"3": 12}
    assert data["gameStats"]["totalDeliveries"] == 1
    assert data["settings"] == {
        "soundEnabled": True,
        "difficulty": "medium",
        "showGrid": True,
    }
    assert from_dict(data) == progress


def test_from_dict_fills_missing_sections() -> None:
    progress = from_dict({"completedLevels": [1, 2]})
    assert list(progress.completed_levels) == [1, 2]
    assert progress.stats.total_deliveries == 0
    assert progress.settings.difficulty is Difficulty.MEDIUM


def test_save_and_load(tmp_path: Path) -> None:
    progress = complete_level(Progress(), 1, 25, 0, 30)
    path = save_progress(progress, tmp_path)

    assert path == tmp_path / f"{PROGRESS_KEY}.json"
    assert json.loads(path.read_text())["completedLevels"] == [1]
    assert load_progress(tmp_path) == progress


def test_load_missing_slot_gives_fresh_progress(tmp_path: Path) -> None:
    assert load_progress(tmp_path / "nowhere") == Progress()


def test_store_records_loop_completion(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path)
    level = make_level(grid=make_grid(start=(0, 0), target=(1, 0)), number=1)
    loop = GameLoop(level=level, on_complete=store.on_complete, seed=0)

    loop.advance(4000)
    loop.handle_key("ArrowRight")

    assert loop.status is SessionStatus.COMPLETED
    assert list(store.progress.completed_levels) == [1]
    assert store.progress.stats.best_times[1] == 26
    assert store.progress.stats.total_time == 4
    assert load_progress(tmp_path) == store.progress

    store.reset()
    assert load_progress(tmp_path).stats.total_deliveries == 0


def test_store_uses_budget_of_played_session(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path)
    assert store.progress.settings.difficulty is Difficulty.MEDIUM
    level = make_level(
        grid=make_grid(start=(0, 0), target=(2, 0)), number=1, time_limit=20
    )
    loop = store.play(level, difficulty=Difficulty.HARD, seed=0)

    loop.advance(5000)
    loop.handle_key("ArrowRight")
    loop.handle_key("ArrowRight")

    assert loop.status is SessionStatus.COMPLETED
    assert loop.state.time_left == 15
    assert store.progress.stats.total_time == 5
    assert store.progress.stats.best_times[1] == 15


def test_store_plays_at_saved_difficulty(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path)
    store.progress = update_settings(store.progress, difficulty=Difficulty.HARD)

    loop = store.play(1, seed=0)

    assert loop.state.time_left == 20


def test_store_on_complete_with_explicit_budget(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path)
    store.on_complete(2, 12, 0, time_budget=20)
    assert store.progress.stats.total_time == 8


def test_level_unlock_follows_completion_order() -> None:
    progress = Progress()
    assert is_level_unlocked(progress, 1)
    assert not is_level_unlocked(progress, 2)

    progress = complete_level(progress, 1, 10, 0, 30)
    assert is_level_unlocked(progress, 2)
    assert not is_level_unlocked(progress, 3)

    progress = complete_level(progress, 3, 10, 0, 30)
    assert is_level_unlocked(progress, 4)
    assert not is_level_unlocked(progress, 3)


def test_best_times_ranking_most_time_left_first() -> None:
    progress = Progress()
    for level, remaining in [(1, 12), (2, 27), (3, 12), (4, 3)]:
        progress = complete_level(progress, level, remaining, 1, 30)

    assert best_times_ranking(progress) == [(2, 27), (1, 12), (3, 12), (4, 3)]
    assert best_times_ranking(Progress()) == []
