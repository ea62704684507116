from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlmodel import Session, select

from database import get_session
from errors import NotFoundOrNotOwned
from models import Task


class TaskStore:
    """Task persistence, always scoped to the owning user"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user_id: str, title: str, status: str, completion_date: datetime) -> Task:
        task = Task(
            user_id=user_id,
            title=title,
            status=status,
            completion_date=completion_date,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def list_by_owner(self, user_id: str) -> List[Task]:
        return list(self.session.exec(select(Task).where(Task.user_id == user_id)).all())

    def find_owned(self, task_id: str, user_id: str) -> Optional[Task]:
        query = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        return self.session.exec(query).first()

    def update(
        self,
        task_id: str,
        user_id: str,
        title: str,
        status: str,
        completion_date: datetime,
    ) -> Task:
        """
        Overwrite title, status and completion date of an owned task

        Raises:
            NotFoundOrNotOwned: If no task with this id belongs to user_id
        """
        task = self.find_owned(task_id, user_id)
        if task is None:
            raise NotFoundOrNotOwned()

        task.title = title
        task.status = status
        task.completion_date = completion_date

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete(self, task_id: str, user_id: str) -> None:
        """
        Remove an owned task

        Raises:
            NotFoundOrNotOwned: If no task with this id belongs to user_id
        """
        task = self.find_owned(task_id, user_id)
        if task is None:
            raise NotFoundOrNotOwned()

        self.session.delete(task)
        self.session.commit()


def get_task_store(session: Session = Depends(get_session)) -> TaskStore:
    return TaskStore(session)
