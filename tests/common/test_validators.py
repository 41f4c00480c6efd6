import pytest

from attendance_tracker.common.validators import optional_text, require_min_length, require_positive
from attendance_tracker.core.exceptions import ValidationError


@pytest.mark.parametrize("value", [12345, ["Math"], {"x": 1}])
def test_min_length_rejects_non_text(value):
    with pytest.raises(ValidationError, match="must be text"):
        require_min_length(value, "Subject name", 2)


def test_optional_text_rejects_non_text():
    with pytest.raises(ValidationError, match="Note must be text"):
        optional_text(3, "Note")
    assert optional_text(None) is None
    assert optional_text("  ok ") == "ok"


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), 0, "-2", True, None, "two"])
def test_positive_rejects_non_finite_and_non_positive(value):
    with pytest.raises(ValidationError):
        require_positive(value, "Hours")


@pytest.mark.parametrize("value, expected", [("1.5", 1.5), (2, 2.0), (0.25, 0.25)])
def test_positive_accepts_finite_numbers(value, expected):
    assert require_positive(value, "Hours") == expected
