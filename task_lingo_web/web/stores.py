"""
Task persistence behind one interface.

``TaskStoreI`` is implemented once per backend.  The ``user_scoped`` switch
decides whether tasks are owned by the signed-in user (every call filters on
``user_id``) or shared by everyone (``user_id`` is ignored).
"""

import abc
import logging
from typing import Any, Dict, List, Optional

from task_lingo_lib.backend.supabase import SupabaseClient
from task_lingo_lib.data_models.task import AuthSession, TaskModel
from task_lingo_lib.exceptions import AuthenticationError, BackendError

from .models import db, Todo


class TaskStoreI(abc.ABC):
    def __init__(self, user_scoped: bool = True, logger=None):
        self.user_scoped = user_scoped
        self.logger = logger or logging.getLogger(__name__)

    def _owner_id(self, identity: Optional[AuthSession]) -> Optional[str]:
        if not self.user_scoped:
            return None
        if identity is None:
            raise AuthenticationError("Authentication required")
        return identity.user_id

    @abc.abstractmethod
    def list_tasks(self, identity: Optional[AuthSession]) -> List[TaskModel]:
        """All visible tasks, most recent first."""

    @abc.abstractmethod
    def get_task(
        self, task_id: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        """The task, or ``None`` when it does not exist or is not visible."""

    @abc.abstractmethod
    def create_task(self, text: str, identity: Optional[AuthSession]) -> TaskModel:
        pass

    @abc.abstractmethod
    def update_task(
        self,
        task_id: str,
        identity: Optional[AuthSession],
        task: Optional[str] = None,
        is_complete: Optional[bool] = None,
    ) -> Optional[TaskModel]:
        """Change text and/or completion; ``None`` when the task is not visible."""

    @abc.abstractmethod
    def set_translation(
        self, task_id: str, translation: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        pass

    @abc.abstractmethod
    def delete_task(self, task_id: str, identity: Optional[AuthSession]) -> bool:
        pass


class SqlTaskStore(TaskStoreI):
    """Tasks in the Flask-SQLAlchemy ``todos`` table."""

    def _query(self, identity: Optional[AuthSession]):
        query = Todo.query
        if self.user_scoped:
            query = query.filter_by(user_id=self._owner_id(identity))
        return query

    def _get(self, task_id: str, identity: Optional[AuthSession]):
        return self._query(identity).filter_by(id=task_id).first()

    def get_task(
        self, task_id: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        todo = self._get(task_id, identity)
        return TaskModel(**todo.as_dict()) if todo is not None else None

    def list_tasks(self, identity: Optional[AuthSession]) -> List[TaskModel]:
        todos = self._query(identity).order_by(Todo.created_at.desc()).all()
        return [TaskModel(**t.as_dict()) for t in todos]

    def create_task(self, text: str, identity: Optional[AuthSession]) -> TaskModel:
        todo = Todo(task=text, user_id=self._owner_id(identity))
        db.session.add(todo)
        db.session.commit()
        return TaskModel(**todo.as_dict())

    def update_task(
        self,
        task_id: str,
        identity: Optional[AuthSession],
        task: Optional[str] = None,
        is_complete: Optional[bool] = None,
    ) -> Optional[TaskModel]:
        todo = self._get(task_id, identity)
        if todo is None:
            return None
        if task is not None:
            todo.task = task
        if is_complete is not None:
            todo.is_complete = is_complete
        db.session.commit()
        return TaskModel(**todo.as_dict())

    def set_translation(
        self, task_id: str, translation: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        todo = self._get(task_id, identity)
        if todo is None:
            return None
        todo.translation = translation
        db.session.commit()
        return TaskModel(**todo.as_dict())

    def delete_task(self, task_id: str, identity: Optional[AuthSession]) -> bool:
        todo = self._get(task_id, identity)
        if todo is None:
            return False
        db.session.delete(todo)
        db.session.commit()
        return True


class SupabaseTaskStore(TaskStoreI):
    """Tasks in a Supabase table, reached through PostgREST."""

    def __init__(
        self,
        client: SupabaseClient,
        table: str = "todos",
        user_scoped: bool = True,
        logger=None,
    ):
        super().__init__(user_scoped=user_scoped, logger=logger)
        self.client = client
        self.table = table

    def _filters(
        self, identity: Optional[AuthSession], **extra
    ) -> Dict[str, Any]:
        filters = dict(extra)
        owner_id = self._owner_id(identity)
        if owner_id is not None:
            filters["user_id"] = owner_id
        return filters

    @staticmethod
    def _token(identity: Optional[AuthSession]) -> Optional[str]:
        return identity.access_token if identity else None

    @staticmethod
    def _first(rows: List[Dict[str, Any]]) -> Optional[TaskModel]:
        return TaskModel(**rows[0]) if rows else None

    def list_tasks(self, identity: Optional[AuthSession]) -> List[TaskModel]:
        rows = self.client.select(
            self.table,
            filters=self._filters(identity),
            order="created_at",
            ascending=False,
            access_token=self._token(identity),
        )
        return [TaskModel(**row) for row in rows]

    def get_task(
        self, task_id: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        rows = self.client.select(
            self.table,
            filters=self._filters(identity, id=task_id),
            access_token=self._token(identity),
        )
        return self._first(rows)

    def create_task(self, text: str, identity: Optional[AuthSession]) -> TaskModel:
        row = {"task": text}
        owner_id = self._owner_id(identity)
        if owner_id is not None:
            row["user_id"] = owner_id
        rows = self.client.insert(
            self.table, row, access_token=self._token(identity)
        )
        created = self._first(rows)
        if created is None:
            raise BackendError(f"Insert into {self.table!r} returned no row")
        return created

    def _update(
        self, task_id: str, values: Dict[str, Any], identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        rows = self.client.update(
            self.table,
            values,
            filters=self._filters(identity, id=task_id),
            access_token=self._token(identity),
        )
        return self._first(rows)

    def update_task(
        self,
        task_id: str,
        identity: Optional[AuthSession],
        task: Optional[str] = None,
        is_complete: Optional[bool] = None,
    ) -> Optional[TaskModel]:
        values = {}
        if task is not None:
            values["task"] = task
        if is_complete is not None:
            values["is_complete"] = is_complete
        return self._update(task_id, values, identity)

    def set_translation(
        self, task_id: str, translation: str, identity: Optional[AuthSession]
    ) -> Optional[TaskModel]:
        return self._update(task_id, {"translation": translation}, identity)

    def delete_task(self, task_id: str, identity: Optional[AuthSession]) -> bool:
        rows = self.client.delete(
            self.table,
            filters=self._filters(identity, id=task_id),
            access_token=self._token(identity),
        )
        return bool(rows)
