from conflicts import find_conflicts
from heatmaps import build_grid_frame, build_load_frame, conflict_mask
from models import Assignment, Configuration, Slot, Teacher, default_config
from pdf_export import export_schedule_pdf


def _double_booked() -> dict:
    return {
        Slot("d1", "p1", "A"): Assignment("Math", "T"),
        Slot("d1", "p1", "B"): Assignment("Math", "T"),
        Slot("d2", "p2", "C"): Assignment("Science", ""),
    }


def test_grid_frame_shape_and_cells(small_config: Configuration) -> None:
    df = build_grid_frame(small_config, _double_booked())
    assert df.shape == (4, 3)
    assert list(df.columns) == ["A", "B", "C"]
    assert df.loc[("d1", "p1"), "A"] == "Math / T"
    assert df.loc[("d2", "p2"), "C"] == "Science / -"
    assert df.loc[("d2", "p1"), "B"] == ""


def test_conflict_mask_marks_every_shared_class(small_config: Configuration) -> None:
    schedule = _double_booked()
    mask = conflict_mask(small_config, schedule, find_conflicts(small_config, schedule))
    assert bool(mask.loc[("d1", "p1"), "A"])
    assert bool(mask.loc[("d1", "p1"), "B"])
    assert not bool(mask.loc[("d1", "p1"), "C"])
    assert int(mask.values.sum()) == 2


def test_duplicate_labels_stay_unique() -> None:
    config = Configuration(dates=("d1",), periods=("p1",), classes=("A", "A"))
    df = build_grid_frame(config, {Slot("d1", "p1", "A"): Assignment("Math", "T")})
    assert list(df.columns) == ["A", "A (2)"]
    assert list(df.iloc[0]) == ["Math / T", "Math / T"]


def test_load_frame_counts_classes(small_config: Configuration) -> None:
    schedule = _double_booked()
    schedule[Slot("d1", "p2", "A")] = Assignment("Math", "Stranger")
    df = build_load_frame(small_config, schedule)
    assert list(df.index) == ["T", "U", "V", "Stranger"]
    assert df.loc["T", "d1 p1"] == 2
    assert df.loc["Stranger", "d1 p2"] == 1
    assert df.loc["U"].sum() == 0


def test_load_frame_duplicate_roster_names_share_counts() -> None:
    config = Configuration(
        dates=("d1",), periods=("p1",), classes=("A", "B"), subjects=("Math",),
        teachers=(Teacher("X", ("Math",)), Teacher("X", ("Math",))),
    )
    schedule = {
        Slot("d1", "p1", "A"): Assignment("Math", "X"),
        Slot("d1", "p1", "B"): Assignment("Math", "X"),
    }
    df = build_load_frame(config, schedule)
    assert list(df.index) == ["X", "X (2)"]
    assert df.loc["X", "d1 p1"] == 2
    assert df.loc["X (2)", "d1 p1"] == 2


def test_pdf_export_returns_pdf_bytes() -> None:
    config = default_config()
    slot = Slot(config.dates[0], config.periods[0], config.classes[0])
    other = Slot(config.dates[0], config.periods[0], config.classes[1])
    schedule = {slot: Assignment("数学", "片岡"), other: Assignment("数学", "片岡")}
    data = export_schedule_pdf(config, schedule, find_conflicts(config, schedule))
    assert data.startswith(b"%PDF")


def test_pdf_export_with_empty_config() -> None:
    assert export_schedule_pdf(Configuration(), {}, set()).startswith(b"%PDF")
