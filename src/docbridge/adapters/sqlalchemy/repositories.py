"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docbridge.domain.checkpoint import StepCheckpoint

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyCheckpointRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, step_name: str) -> StepCheckpoint | None:
        return self.session.get(StepCheckpoint, step_name)

    def add(self, checkpoint: StepCheckpoint) -> None:
        self.session.add(checkpoint)
