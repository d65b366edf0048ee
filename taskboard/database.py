import logging
from datetime import datetime
from typing import Callable, List

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, select

from .errors import AppError
from .models import Task as TaskModel
from .schemas.task import Task

logger = logging.getLogger(__name__)


def normalize_url(database_url: str) -> str:
    """Accept the ``postgres://`` scheme libpq-style URLs use."""
    if database_url.startswith("postgres://"):
        return "postgresql://" + database_url[len("postgres://"):]
    return database_url


def create_db_engine(database_url: str) -> Engine:
    database_url = normalize_url(database_url)
    try:
        if database_url.startswith("sqlite"):
            return create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
            )

        # Postgres: the driver's pool handles checkout, pre-ping drops dead connections
        return create_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,
        )
    except SQLAlchemyError as exc:
        raise AppError.storage(f"failed to open database: {exc}") from exc


def rfc3339_now() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


class TaskStore:
    """Storage access for task rows. Every method issues exactly one statement."""

    def __init__(self, engine: Engine, clock: Callable[[], str] = rfc3339_now) -> None:
        self.engine = engine
        self.clock = clock

    def create_tables(self) -> None:
        """Create the tasks table if it does not exist yet."""
        try:
            SQLModel.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise AppError.storage(f"failed to prepare database: {exc}") from exc

    def list_all(self) -> List[Task]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(select(TaskModel)).all()
        except SQLAlchemyError as exc:
            raise AppError.storage(f"failed to get tasks: {exc}") from exc

        try:
            return [Task.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise AppError.storage(f"failed to scan value: {exc}") from exc

    def create(self, title: str) -> None:
        try:
            with Session(self.engine) as session:
                session.add(TaskModel(title=title, created_at=self.clock()))
                session.commit()
        except SQLAlchemyError as exc:
            raise AppError.storage(f"failed to create task: {exc}") from exc
        logger.info("created task %r", title)

    def update(self, task_id: int, title: str) -> int:
        """Set a new title; returns the number of rows touched (0 for unknown ids).

        Ids past the driver's integer range surface as ``OverflowError``
        from sqlite3 and are reported like any other storage failure.
        """
        statement = (
            update(TaskModel)
            .where(TaskModel.id == task_id)
            .values(title=title, updated_at=self.clock())
        )
        try:
            with self.engine.begin() as conn:
                result = conn.execute(statement)
        except (SQLAlchemyError, OverflowError) as exc:
            raise AppError.storage(f"failed to edit task: {exc}") from exc
        logger.info("edited task %d (%d row(s))", task_id, result.rowcount)
        return result.rowcount

    def delete(self, task_id: int) -> int:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(delete(TaskModel).where(TaskModel.id == task_id))
        except (SQLAlchemyError, OverflowError) as exc:
            raise AppError.storage(f"failed to delete task: {exc}") from exc
        logger.info("deleted task %d (%d row(s))", task_id, result.rowcount)
        return result.rowcount

    def close(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> TaskStore:
    """Dependency returning the store built at startup."""
    return request.app.state.store
