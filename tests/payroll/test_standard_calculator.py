from datetime import timedelta

from src.timekeeping.timekeeping.core.enums import MealSource
from src.timekeeping.timekeeping.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.timekeeping.timekeeping.shifts.model import MealPeriod, WorkInterval
from tests.fakes import utc


def test_standard_calculator_subtracts_meal():
    intervals = [WorkInterval(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 17, 0))]
    meals = [MealPeriod(start=utc(2025, 1, 1, 12, 0), end=utc(2025, 1, 1, 13, 0))]

    calc = StandardPayrollCalculator()
    assert calc.worked_duration(intervals, meals) == timedelta(hours=8)


def test_meal_outside_intervals_deducts_nothing():
    intervals = [
        WorkInterval(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 12, 0)),
        WorkInterval(start=utc(2025, 1, 1, 12, 30), end=utc(2025, 1, 1, 17, 0)),
    ]
    meals = [MealPeriod(start=utc(2025, 1, 1, 12, 0), end=utc(2025, 1, 1, 12, 30), source=MealSource.INFERRED)]

    calc = StandardPayrollCalculator()
    assert calc.worked_duration(intervals, meals) == timedelta(hours=8, minutes=30)


def test_meal_overhanging_clock_out_only_counts_the_overlap():
    intervals = [WorkInterval(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 12, 0))]
    meals = [MealPeriod(start=utc(2025, 1, 1, 11, 30), end=utc(2025, 1, 1, 13, 0))]

    calc = StandardPayrollCalculator()
    assert calc.worked_duration(intervals, meals) == timedelta(hours=3, minutes=30)


def test_worked_time_never_goes_negative():
    intervals = [WorkInterval(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 9, 0))]
    meals = [
        MealPeriod(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 9, 0)),
        MealPeriod(start=utc(2025, 1, 1, 8, 0), end=utc(2025, 1, 1, 9, 0)),
    ]

    calc = StandardPayrollCalculator()
    assert calc.worked_duration(intervals, meals) == timedelta(0)
