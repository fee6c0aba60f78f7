import pytest

from app.exceptions import ExerciseNotFound, ModuleNotFound
from app.services.catalog_service import CatalogService
from app.services.progress_service import ProgressService
from tests.fakes import (
    SAMPLE_MODULES,
    DisabledCache,
    InMemoryCatalogRepository,
    InMemoryProgressRepository,
)


@pytest.fixture
def progress_repo():
    return InMemoryProgressRepository(usernames={1: "ada", 2: "grace", 3: "linus"})


@pytest.fixture
def service(progress_repo):
    catalog = InMemoryCatalogRepository(SAMPLE_MODULES)
    return ProgressService(progress_repo, catalog, CatalogService(catalog, DisabledCache()))


def test_new_user_starts_empty(service):
    progress = service.get_progress(1)

    assert progress.completed_exercises == []
    assert progress.points == 0


def test_complete_exercise_awards_points_once(service):
    first = service.complete_exercise(1, "zero-shot", "zs-1")
    second = service.complete_exercise(1, "zero-shot", "zs-1")

    assert first.points == 10
    assert second.points == 10
    assert len(second.completed_exercises) == 1

    entry = second.completed_exercises[0]
    assert entry["moduleId"] == "zero-shot"
    assert entry["exerciseId"] == "zs-1"
    assert isinstance(entry["timestamp"], int)


def test_completions_keep_order(service):
    service.complete_exercise(1, "few-shot", "fs-1")
    progress = service.complete_exercise(1, "zero-shot", "zs-2")

    assert [entry["exerciseId"] for entry in progress.completed_exercises] == ["fs-1", "zs-2"]
    assert progress.points == 20


def test_complete_unknown_exercise_is_rejected(service):
    with pytest.raises(ExerciseNotFound):
        service.complete_exercise(1, "zero-shot", "zs-99")
    with pytest.raises(ModuleNotFound):
        service.complete_exercise(1, "missing", "zs-1")

    assert service.get_progress(1).points == 0


def test_summary(service):
    service.complete_exercise(1, "zero-shot", "zs-1")
    service.complete_exercise(1, "few-shot", "fs-1")

    summary = service.get_summary(1)

    assert summary["completed_exercises"] == 2
    assert summary["total_exercises"] == 3
    assert summary["completed_modules"] == 1
    assert summary["total_modules"] == 2
    assert summary["overall_percentage"] == 66.67
    assert summary["points"] == 20
    assert summary["modules"][0] == {
        "module_id": "zero-shot",
        "title": "Zero-Shot Prompting",
        "completed": 1,
        "total": 2,
        "percentage": 50.0,
    }
    assert summary["modules"][1]["percentage"] == 100.0


def test_summary_for_new_user(service):
    summary = service.get_summary(3)

    assert summary["completed_exercises"] == 0
    assert summary["overall_percentage"] == 0.0
    assert summary["completed_modules"] == 0


def test_leaderboard_ranks_users_with_points(service):
    service.complete_exercise(2, "zero-shot", "zs-1")
    service.complete_exercise(1, "zero-shot", "zs-1")
    service.complete_exercise(1, "zero-shot", "zs-2")
    service.get_progress(3)

    board = service.get_leaderboard()

    assert [(entry["rank"], entry["username"], entry["points"]) for entry in board] == [
        (1, "ada", 20),
        (2, "grace", 10),
    ]
    assert board[0]["completed_exercises"] == 2


def test_leaderboard_ties_broken_by_user_id(service):
    service.complete_exercise(2, "zero-shot", "zs-1")
    service.complete_exercise(1, "few-shot", "fs-1")

    board = service.get_leaderboard()

    assert [entry["user_id"] for entry in board] == [1, 2]


def test_leaderboard_limit(service):
    for user_id in (1, 2, 3):
        service.complete_exercise(user_id, "zero-shot", "zs-1")

    assert len(service.get_leaderboard(limit=2)) == 2
