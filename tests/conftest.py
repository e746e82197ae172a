from datetime import date
from decimal import Decimal

import duckdb
import pytest

from db import init_db
from models.recurrence_rule import RecurrenceRule


def make_rule(**overrides):
    fields = {
        "id": "r1",
        "description": "Rent",
        "frequency": "weekly",
        "start_date": date(2024, 1, 1),
        "amount": Decimal("50.00"),
        "kind": "expense",
    }
    fields.update(overrides)
    return RecurrenceRule(**fields)


@pytest.fixture
def conn():
    connection = duckdb.connect(":memory:")
    init_db(connection)
    yield connection
    connection.close()
