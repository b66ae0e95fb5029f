import pytest

from app.core.security import verify_password
from app.database import create_db_and_tables, get_engine
from app.schemas.budget import Budget
from app.schemas.user import UserCreate
from app.storage.base import UsernameTakenError
from app.storage.memory import MemoryStorage
from app.storage.sql import SqlStorage


def _sql_storage():
    engine = get_engine("sqlite://")
    create_db_and_tables(engine)
    return SqlStorage(engine)


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    if request.param == "memory":
        return MemoryStorage()
    return _sql_storage()


def test_save_assigns_increasing_ids(backend, scenario_a):
    budget = Budget.model_validate(scenario_a)

    first = backend.save_budget(budget)
    second = backend.save_budget(budget)

    assert second.id > first.id
    assert first.created_at is not None
    assert first.calculations.remaining == 600


def test_get_returns_saved_record(backend, scenario_a):
    saved = backend.save_budget(Budget.model_validate(scenario_a))

    loaded = backend.get_budget(saved.id)

    assert loaded == saved
    assert loaded.needs[0].name == "Rent"


def test_get_unknown_budget(backend):
    assert backend.get_budget(12345) is None


def test_zero_income_round_trips(backend):
    saved = backend.save_budget(Budget(income=0))
    assert backend.get_budget(saved.id).calculations.needs_percentage is None


def test_calculate_has_no_side_effects(backend, scenario_a):
    backend.calculate_budget(Budget.model_validate(scenario_a))
    assert backend.get_budget(1) is None


def test_create_and_lookup_user(backend):
    user = backend.create_user(UserCreate(username="ana", password="s3cret"))

    assert user.id is not None
    assert user.password != "s3cret"
    assert verify_password("s3cret", user.password)
    assert backend.get_user(user.id).username == "ana"
    assert backend.get_user_by_username("ana").id == user.id


def test_unknown_user(backend):
    assert backend.get_user(99) is None
    assert backend.get_user_by_username("nobody") is None


def test_duplicate_username_rejected(backend):
    backend.create_user(UserCreate(username="ana", password="one"))

    with pytest.raises(UsernameTakenError):
        backend.create_user(UserCreate(username="ana", password="two"))

    assert verify_password("one", backend.get_user_by_username("ana").password)


def test_user_ids_increase():
    storage = MemoryStorage()
    first = storage.create_user(UserCreate(username="a", password="x"))
    second = storage.create_user(UserCreate(username="b", password="x"))
    assert (first.id, second.id) == (1, 2)
