"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Index

from task_tracker.domain.models.task import TaskStatus, TITLE_MAX_LENGTH
from .database import Base


class TaskModel(Base):
    """Task table"""
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)

    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, default="")
    # Plain string so legacy values can be normalized on read
    status = Column(String(32), nullable=False, default=TaskStatus.PENDING.value)

    # Dates
    start_date = Column(DateTime(timezone=True))
    deadline = Column(DateTime(timezone=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_tasks_user_id_status', 'user_id', 'status'),
    )

    def __repr__(self) -> str:
        return f"<TaskModel id={self.id} user_id={self.user_id} status={self.status}>"
