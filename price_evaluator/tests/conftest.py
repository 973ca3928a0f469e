"""Pytest configuration and shared fixtures."""

import pytest

from price_evaluator.data import Record, RecordSet


@pytest.fixture
def linear_records() -> RecordSet:
    """Three records on the exact line price = 10 * x."""
    return RecordSet.of(
        [
            Record({"x": 1.0}, price=10.0, label="r1"),
            Record({"x": 2.0}, price=20.0, label="r2"),
            Record({"x": 3.0}, price=30.0, label="r3"),
        ]
    )


@pytest.fixture
def car_records() -> RecordSet:
    """
    Heterogeneous records generated from price = 20000 - 1500*age - 0.05*mileage + 800*seats.

    Not every record declares every property; undeclared ones count as 0.
    """

    def price(age: float = 0.0, mileage: float = 0.0, seats: float = 0.0) -> float:
        return 20000 - 1500 * age - 0.05 * mileage + 800 * seats

    return RecordSet.of(
        [
            Record({"age": 2, "mileage": 30000}, price=price(2, 30000), label="a"),
            Record({"age": 5, "mileage": 90000, "seats": 5}, price=price(5, 90000, 5), label="b"),
            Record({"age": 1, "seats": 4}, price=price(1, 0, 4), label="c"),
            Record({"mileage": 10000, "seats": 2}, price=price(0, 10000, 2), label="d"),
            Record({"age": 8, "mileage": 150000, "seats": 7}, price=price(8, 150000, 7), label="e"),
            Record({"age": 3, "mileage": 45000, "seats": 5}, price=price(3, 45000, 5), label="f"),
        ]
    )
