"""Shared test fixtures and factories."""

from tests.shared.fixtures.factories import (
    TEST_USER_ID,
    TEST_USER_ID_2,
    FixedClock,
    TestUserFactory,
    expense_record,
    group_record,
    loan_record,
    split_bill_record,
)
from tests.shared.fixtures.event_loop import run_in_fresh_loop
from tests.shared.fixtures.in_memory import InMemoryPartitionRepository

__all__ = [
    "TEST_USER_ID",
    "TEST_USER_ID_2",
    "FixedClock",
    "InMemoryPartitionRepository",
    "TestUserFactory",
    "expense_record",
    "group_record",
    "loan_record",
    "run_in_fresh_loop",
    "split_bill_record",
]
