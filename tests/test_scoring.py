import pytest

from refill.models import AmenityReport
from refill.scoring import (
    ScoreColor,
    calculate_average_score,
    calculate_score,
    clamp_score,
    get_score_color,
    get_score_label,
)


@pytest.mark.parametrize("base", [0, 2.5, 5, 7.3, 10])
def test_no_answers_scores_the_baseline(base):
    assert calculate_score(AmenityReport(base_score=base)) == pytest.approx(base)


def test_baseline_defaults_to_five():
    assert calculate_score(AmenityReport()) == 5


def test_zero_baseline_is_kept():
    assert calculate_score(AmenityReport(base_score=0)) == 0


def test_adjustments():
    assert calculate_score(AmenityReport(free_refills=True)) == pytest.approx(7.2)
    assert calculate_score(AmenityReport(free_refills=False)) == pytest.approx(2.8)
    assert calculate_score(AmenityReport(bread_basket=True)) == pytest.approx(6.0)
    assert calculate_score(AmenityReport(bread_basket=False)) == pytest.approx(2.0)
    assert calculate_score(AmenityReport(pay_at_table=True)) == pytest.approx(6.5)
    assert calculate_score(AmenityReport(pay_at_table=False)) == pytest.approx(4.5)
    assert calculate_score(AmenityReport(attendant=True)) == pytest.approx(2.0)
    assert calculate_score(AmenityReport(attendant=False)) == pytest.approx(5.0)


@pytest.mark.parametrize("field", ["free_refills", "bread_basket", "pay_at_table"])
def test_flipping_to_true_never_lowers_score(field):
    low = calculate_score(AmenityReport(base_score=4, **{field: False}))
    high = calculate_score(AmenityReport(base_score=4, **{field: True}))
    assert high > low


def test_attendant_true_lowers_score():
    without = calculate_score(AmenityReport(base_score=6, attendant=False))
    with_attendant = calculate_score(AmenityReport(base_score=6, attendant=True))
    assert with_attendant < without
    assert without - with_attendant == pytest.approx(3.0)


def test_clamps_to_ten():
    report = AmenityReport(base_score=10, free_refills=True, bread_basket=True, pay_at_table=True)
    assert calculate_score(report) == 10


def test_clamps_to_zero():
    report = AmenityReport(base_score=1, free_refills=False, bread_basket=False, attendant=True)
    assert calculate_score(report) == 0


def test_camel_case_payload():
    report = AmenityReport.model_validate(
        {"freeRefills": True, "breadBasket": None, "payAtTable": False, "attendant": False, "baseScore": 8}
    )
    assert report.free_refills is True
    assert report.pay_at_table is False
    assert calculate_score(report) == pytest.approx(8 + 2.2 - 0.5)


def test_base_score_out_of_range_rejected():
    with pytest.raises(ValueError):
        AmenityReport(base_score=11)


def test_clamp_score():
    assert clamp_score(-0.1) == 0
    assert clamp_score(10.5) == 10
    assert clamp_score(6.2) == 6.2


def test_average_score():
    assert calculate_average_score([]) == 0
    assert calculate_average_score([5, 7]) == 6
    assert calculate_average_score([5, 7], [1, 3]) == 6.5


def test_average_score_ignores_mismatched_weights():
    assert calculate_average_score([5, 7], [1]) == 6


def test_average_score_zero_weights():
    assert calculate_average_score([5, 7], [0, 0]) == 0


@pytest.mark.parametrize(
    "score,label",
    [(10, "Excellent"), (9, "Excellent"), (8.9, "Very Good"), (7, "Very Good"), (5, "Good"), (3, "Fair"), (2.9, "Poor"), (-1, "Poor"), (12, "Excellent")],
)
def test_score_label(score, label):
    assert get_score_label(score) == label


@pytest.mark.parametrize(
    "score,color",
    [(8, ScoreColor.GREEN), (11, ScoreColor.GREEN), (6, ScoreColor.AMBER), (4, ScoreColor.ORANGE), (3.99, ScoreColor.RED), (-2, ScoreColor.RED)],
)
def test_score_color(score, color):
    assert get_score_color(score) is color


def test_score_color_values_are_hex():
    assert get_score_color(9).value == "#10B981"
