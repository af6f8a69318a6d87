"""Pytest fixtures for the finance coach analytics tests.

Database-backed tests get their own SQLite file under ``tmp_path`` so no test
ever touches a shared ``finances.db``.
"""

import pytest

from finance_coach import models
from finance_coach.ledger import Ledger

from helpers import half_year_history


@pytest.fixture
def sample_ledger():
    return Ledger(half_year_history())


@pytest.fixture
def db_session(tmp_path):
    models.init_db(str(tmp_path / 'finances.db'))
    session = models.get_session()
    try:
        yield session
    finally:
        session.close()
        models._engine.dispose()
        models._engine = None
        models._Session = None
