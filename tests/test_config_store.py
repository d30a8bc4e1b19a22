import pytest

from config_store import add_teacher, enumeration_text, remove_teacher, set_enumeration, toggle_teacher_subject
from models import Configuration, Teacher, default_config, parse_list
from settings import SENTINEL_TEACHER


def test_parse_list_trims_and_drops_empty_items() -> None:
    assert parse_list(" a, ,b ,a") == ("a", "b", "a")
    assert parse_list("") == ()
    assert parse_list(None) == ()


def test_set_enumeration_replaces_only_that_field(small_config: Configuration) -> None:
    updated = set_enumeration(small_config, "classes", "X,  Y , ,X")
    assert updated.classes == ("X", "Y", "X")
    assert updated.dates == small_config.dates
    assert small_config.classes == ("A", "B", "C")


def test_set_enumeration_rejects_unknown_field(small_config: Configuration) -> None:
    with pytest.raises(ValueError):
        set_enumeration(small_config, "teachers", "a,b")


def test_enumeration_text_round_trips(small_config: Configuration) -> None:
    text = enumeration_text(small_config, "subjects")
    assert text == "Math, English, Science"
    assert set_enumeration(small_config, "subjects", text) == small_config


def test_add_teacher_appends_with_no_subjects(small_config: Configuration) -> None:
    updated = add_teacher(small_config, "W")
    assert updated.teachers[-1] == Teacher("W", ())
    assert len(updated.teachers) == len(small_config.teachers) + 1


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_teacher_ignores_blank_names(small_config: Configuration, name) -> None:
    assert add_teacher(small_config, name) is small_config


def test_toggle_teacher_subject_adds_then_removes(small_config: Configuration) -> None:
    added = toggle_teacher_subject(small_config, 0, "Science")
    assert added.teachers[0].subjects == ("Math", "Science")
    removed = toggle_teacher_subject(added, 0, "Science")
    assert removed.teachers[0].subjects == ("Math",)
    assert removed == small_config


def test_toggle_out_of_range_is_an_error(small_config: Configuration) -> None:
    with pytest.raises(IndexError):
        toggle_teacher_subject(small_config, 3, "Math")
    with pytest.raises(IndexError):
        toggle_teacher_subject(small_config, -1, "Math")


def test_remove_teacher_shifts_later_teachers(small_config: Configuration) -> None:
    updated = remove_teacher(small_config, 1)
    assert updated.teacher_names() == ["T", "V"]
    with pytest.raises(IndexError):
        remove_teacher(updated, 2)


def test_default_config_placeholder_takes_every_subject() -> None:
    config = default_config()
    placeholder = config.find_teacher(SENTINEL_TEACHER)
    assert placeholder is not None
    assert set(placeholder.subjects) == set(config.subjects)
    assert len(list(config.iter_slots())) == 4 * 3 * 4
