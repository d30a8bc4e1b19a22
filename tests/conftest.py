import pytest

from models import Configuration, Teacher


@pytest.fixture
def small_config() -> Configuration:
    return Configuration(
        dates=("d1", "d2"),
        periods=("p1", "p2"),
        classes=("A", "B", "C"),
        subjects=("Math", "English", "Science"),
        teachers=(
            Teacher("T", ("Math",)),
            Teacher("U", ("English", "Math")),
            Teacher("V", ("Science",)),
        ),
    )
