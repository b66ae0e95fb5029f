from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def get_engine(database_url: str, echo: bool = False) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)  # echo=True imprime las queries

    # FastAPI runs sync handlers on worker threads
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)


def create_db_and_tables(engine: Engine) -> None:
    from app.models.budget import BudgetRecord  # importar los modelos
    from app.models.user import User
    SQLModel.metadata.create_all(engine)
