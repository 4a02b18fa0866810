import logging
from typing import Dict, List, Protocol

from sqlalchemy import insert
from sqlalchemy.orm import Session, sessionmaker

from my_todo.api.todo.label.services import LabelRepositoryForMemory
from my_todo.core.exceptions import NotFound
from my_todo.core.locks import ReadWriteLock
from my_todo.db.models.todo.label import Label as LabelModel
from my_todo.db.models.todo.task import Task as TaskModel
from my_todo.db.models.todo.task_label import TaskLabel
from my_todo.db.session import translate_errors
from . import schemas
from .fold import fold_entities

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    def create(self, payload: schemas.TaskCreate) -> schemas.Task: ...

    def find(self, id: int) -> schemas.Task: ...

    def all(self) -> List[schemas.Task]: ...

    def update(self, id: int, payload: schemas.TaskUpdate) -> schemas.Task: ...

    def delete(self, id: int) -> None: ...


def unique_ids(ids: List[int]) -> List[int]:
    return list(dict.fromkeys(ids))


class TaskRepositoryForDb:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _rows(db: Session):
        return (
            db.query(
                TaskModel.id,
                TaskModel.text,
                TaskModel.completed,
                LabelModel.id.label("label_id"),
                LabelModel.name.label("label_name"),
            )
            .outerjoin(TaskLabel, TaskModel.id == TaskLabel.task_id)
            .outerjoin(LabelModel, TaskLabel.label_id == LabelModel.id)
        )

    @staticmethod
    def _check_labels(db: Session, label_ids: List[int]) -> None:
        if not label_ids:
            return
        found = {
            row.id for row in db.query(LabelModel.id).filter(LabelModel.id.in_(label_ids))
        }
        for label_id in label_ids:
            if label_id not in found:
                raise NotFound(label_id)

    @staticmethod
    def _insert_task_labels(db: Session, task_id: int, label_ids: List[int]) -> None:
        if not label_ids:
            return
        db.execute(
            insert(TaskLabel),
            [{"task_id": task_id, "label_id": label_id} for label_id in label_ids],
        )

    def create(self, payload: schemas.TaskCreate) -> schemas.Task:
        label_ids = unique_ids(payload.label_ids)
        with translate_errors():
            with self.session_factory.begin() as db:
                self._check_labels(db, label_ids)
                db_task = TaskModel(text=payload.text, completed=False)
                db.add(db_task)
                db.flush()
                task_id = db_task.id
                self._insert_task_labels(db, task_id, label_ids)

        logger.debug("Created task %s with labels %s", task_id, label_ids)
        return self.find(task_id)

    def find(self, id: int) -> schemas.Task:
        with translate_errors():
            with self.session_factory() as db:
                rows = (
                    self._rows(db)
                    .filter(TaskModel.id == id)
                    .order_by(LabelModel.id.asc())
                    .all()
                )

        tasks = fold_entities(schemas.TaskWithLabelRow(**row._mapping) for row in rows)
        if not tasks:
            raise NotFound(id)
        return tasks[0]

    def all(self) -> List[schemas.Task]:
        with translate_errors():
            with self.session_factory() as db:
                rows = (
                    self._rows(db)
                    .order_by(TaskModel.id.desc(), LabelModel.id.asc())
                    .all()
                )

        return fold_entities(schemas.TaskWithLabelRow(**row._mapping) for row in rows)

    def update(self, id: int, payload: schemas.TaskUpdate) -> schemas.Task:
        with translate_errors():
            with self.session_factory.begin() as db:
                db_task = db.get(TaskModel, id)
                if db_task is None:
                    raise NotFound(id)

                if payload.text is not None:
                    db_task.text = payload.text
                if payload.completed is not None:
                    db_task.completed = payload.completed

                if payload.label_ids is not None:
                    # replace the whole association set
                    label_ids = unique_ids(payload.label_ids)
                    self._check_labels(db, label_ids)
                    db.query(TaskLabel).filter(TaskLabel.task_id == id).delete(
                        synchronize_session=False
                    )
                    self._insert_task_labels(db, id, label_ids)

        return self.find(id)

    def delete(self, id: int) -> None:
        with translate_errors():
            with self.session_factory.begin() as db:
                db.query(TaskLabel).filter(TaskLabel.task_id == id).delete(
                    synchronize_session=False
                )
                deleted = db.query(TaskModel).filter(TaskModel.id == id).delete(
                    synchronize_session=False
                )
                if not deleted:
                    raise NotFound(id)

        logger.debug("Deleted task %s", id)


class TaskRepositoryForMemory:
    """
    Tasks kept in a dict, label ids kept beside them like the ``task_labels``
    table. Labels are looked up in ``labels`` on every read, so deleting a
    label there removes it from every task.
    """

    def __init__(self, labels: LabelRepositoryForMemory):
        self._labels = labels
        self._tasks: Dict[int, schemas.Task] = {}
        self._task_labels: Dict[int, List[int]] = {}
        self._lock = ReadWriteLock()
        self._next_id = 1

    def _resolve_labels(self, label_ids: List[int]) -> List[int]:
        label_ids = unique_ids(label_ids)
        known = self._labels.lookup(label_ids)
        for label_id in label_ids:
            if label_id not in known:
                raise NotFound(label_id)
        return label_ids

    def _fold(self, ids: List[int]) -> List[schemas.Task]:
        labels = self._labels.lookup(
            label_id for id in ids for label_id in self._task_labels[id]
        )
        rows = []
        for id in ids:
            task = self._tasks[id]
            attached = [labels[label_id] for label_id in self._task_labels[id] if label_id in labels]
            if not attached:
                rows.append(schemas.TaskWithLabelRow(id=id, text=task.text, completed=task.completed))
            for label in attached:
                rows.append(
                    schemas.TaskWithLabelRow(
                        id=id,
                        text=task.text,
                        completed=task.completed,
                        label_id=label.id,
                        label_name=label.name,
                    )
                )
        return fold_entities(rows)

    def create(self, payload: schemas.TaskCreate) -> schemas.Task:
        with self._lock.write():
            label_ids = self._resolve_labels(payload.label_ids)
            id = self._next_id
            self._tasks[id] = schemas.Task(id=id, text=payload.text, completed=False)
            self._task_labels[id] = label_ids
            self._next_id += 1
            return self._fold([id])[0]

    def find(self, id: int) -> schemas.Task:
        with self._lock.read():
            if id not in self._tasks:
                raise NotFound(id)
            return self._fold([id])[0]

    def all(self) -> List[schemas.Task]:
        with self._lock.read():
            return self._fold(sorted(self._tasks))

    def update(self, id: int, payload: schemas.TaskUpdate) -> schemas.Task:
        with self._lock.write():
            task = self._tasks.get(id)
            if task is None:
                raise NotFound(id)

            label_ids = self._task_labels[id]
            if payload.label_ids is not None:
                label_ids = self._resolve_labels(payload.label_ids)

            self._tasks[id] = schemas.Task(
                id=id,
                text=payload.text if payload.text is not None else task.text,
                completed=payload.completed if payload.completed is not None else task.completed,
            )
            self._task_labels[id] = label_ids
            return self._fold([id])[0]

    def delete(self, id: int) -> None:
        with self._lock.write():
            if self._tasks.pop(id, None) is None:
                raise NotFound(id)
            del self._task_labels[id]
