from datetime import date
from decimal import Decimal

from conftest import make_rule
from services.projection_service import calculate_projection

FRIDAY = 5
TODAY = date(2024, 3, 1)


def test_overlays_starting_balance():
    rule = make_rule(occurrence_day=FRIDAY)

    projection = calculate_projection([rule], starting_balance=Decimal("1000.00"),
                                      today=TODAY, horizon_days=14)

    assert projection.start_date == TODAY
    assert projection.end_date == date(2024, 3, 15)
    assert projection.timeline[0].projected_balance == Decimal("950.00")
    assert projection.timeline[0].events == ["-$50.00: Rent"]
    assert projection.ending_balance == Decimal("900.00")
    assert projection.lowest_balance == Decimal("900.00")


def test_lowest_balance_tracks_the_dip():
    rent = make_rule(occurrence_day=FRIDAY, amount=Decimal("300"))
    pay = make_rule(id="pay", description="Paycheck", kind="earning",
                    amount=Decimal("500"), frequency="monthly", occurrence_day=10)

    projection = calculate_projection([rent, pay], starting_balance=Decimal("400"),
                                      today=TODAY, horizon_days=14)

    # 03-01 rent, 03-08 rent, 03-10 paycheck
    assert projection.lowest_balance == Decimal("-200")
    assert projection.ending_balance == Decimal("300")


def test_no_rules_is_flat():
    projection = calculate_projection([], starting_balance=Decimal("25"), today=TODAY,
                                      horizon_days=3)

    assert [day.projected_balance for day in projection.timeline] == [Decimal("25")] * 4
    assert projection.skipped == []
