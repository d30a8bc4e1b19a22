from assignments import assign, clear_slot
from config_store import set_enumeration
from conflicts import describe_conflicts, find_conflicts, is_conflicted, teacher_load
from models import Assignment, Configuration, Slot
from settings import SENTINEL_TEACHER


def test_same_teacher_two_classes_is_a_conflict(small_config: Configuration) -> None:
    a, b = Slot("d1", "p1", "A"), Slot("d1", "p1", "B")
    schedule = {a: Assignment("Math", "T"), b: Assignment("Math", "T")}
    assert find_conflicts(small_config, schedule) == {("d1", "p1", "T")}
    assert is_conflicted(find_conflicts(small_config, schedule), a, schedule[a])
    assert is_conflicted(find_conflicts(small_config, schedule), b, schedule[b])

    assert find_conflicts(small_config, clear_slot(schedule, b)) == set()


def test_reassigning_subject_removes_conflict(small_config: Configuration) -> None:
    a, b = Slot("d1", "p1", "A"), Slot("d1", "p1", "B")
    schedule = {a: Assignment("Math", "T"), b: Assignment("Math", "T")}
    schedule = assign(schedule, b, "subject", "Science")
    assert find_conflicts(small_config, schedule) == set()


def test_different_times_do_not_conflict(small_config: Configuration) -> None:
    schedule = {
        Slot("d1", "p1", "A"): Assignment("Math", "T"),
        Slot("d1", "p2", "B"): Assignment("Math", "T"),
        Slot("d2", "p1", "C"): Assignment("Math", "T"),
    }
    assert find_conflicts(small_config, schedule) == set()


def test_placeholder_teacher_is_never_a_conflict(small_config: Configuration) -> None:
    schedule = {
        Slot("d1", "p1", c): Assignment("Math", SENTINEL_TEACHER) for c in small_config.classes
    }
    assert find_conflicts(small_config, schedule) == set()
    assert teacher_load(small_config, schedule)[("d1", "p1")] == {}


def test_empty_teacher_never_counts(small_config: Configuration) -> None:
    schedule = {Slot("d1", "p1", c): Assignment("Math", "") for c in small_config.classes}
    assert find_conflicts(small_config, schedule) == set()


def test_three_way_booking_reports_one_triple(small_config: Configuration) -> None:
    schedule = {Slot("d2", "p2", c): Assignment("Math", "U") for c in small_config.classes}
    schedule[Slot("d2", "p2", "C")] = Assignment("Science", "V")
    schedule[Slot("d2", "p2", "B")] = Assignment("English", "U")
    assert find_conflicts(small_config, schedule) == {("d2", "p2", "U")}
    assert teacher_load(small_config, schedule)[("d2", "p2")]["U"] == 2


def test_removed_dates_and_classes_are_ignored(small_config: Configuration) -> None:
    schedule = {Slot("d1", "p1", "A"): Assignment("Math", "T"), Slot("d1", "p1", "B"): Assignment("Math", "T")}
    without_b = set_enumeration(small_config, "classes", "A, C")
    assert find_conflicts(without_b, schedule) == set()
    without_d1 = set_enumeration(small_config, "dates", "d2")
    assert find_conflicts(without_d1, schedule) == set()
    assert find_conflicts(small_config, schedule) == {("d1", "p1", "T")}


def test_recomputing_gives_the_same_answer(small_config: Configuration) -> None:
    schedule = {
        Slot("d1", "p1", "A"): Assignment("Math", "T"),
        Slot("d1", "p1", "C"): Assignment("Math", "T"),
        Slot("d2", "p2", "A"): Assignment("English", "U"),
        Slot("d2", "p2", "B"): Assignment("Math", "U"),
    }
    first = find_conflicts(small_config, schedule)
    assert first == find_conflicts(small_config, schedule)
    assert first == {("d1", "p1", "T"), ("d2", "p2", "U")}


def test_describe_conflicts_in_grid_order(small_config: Configuration) -> None:
    conflicts = {("d2", "p1", "U"), ("d1", "p2", "T"), ("d1", "p2", "A")}
    assert describe_conflicts(small_config, conflicts) == ["d1 p2: A", "d1 p2: T", "d2 p1: U"]
