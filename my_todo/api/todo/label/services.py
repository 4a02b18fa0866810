import logging
from typing import Dict, Iterable, List, Protocol

from sqlalchemy.orm import sessionmaker

from my_todo.core.exceptions import Duplicate, NotFound
from my_todo.core.locks import ReadWriteLock
from my_todo.db.models.todo.label import Label as LabelModel
from my_todo.db.models.todo.task_label import TaskLabel
from my_todo.db.session import translate_errors
from .schemas import Label

logger = logging.getLogger(__name__)


class LabelRepository(Protocol):
    def create(self, name: str) -> Label: ...

    def all(self) -> List[Label]: ...

    def delete(self, id: int) -> None: ...


class LabelRepositoryForDb:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def create(self, name: str) -> Label:
        with translate_errors():
            with self.session_factory.begin() as db:
                existing = db.query(LabelModel).filter(LabelModel.name == name).first()
                if existing:
                    raise Duplicate(existing.id)

                db_label = LabelModel(name=name)
                db.add(db_label)
                db.flush()
                label = Label.model_validate(db_label)

        logger.debug("Created label %s", label.id)
        return label

    def all(self) -> List[Label]:
        with translate_errors():
            with self.session_factory() as db:
                rows = db.query(LabelModel).order_by(LabelModel.id.asc()).all()
                return [Label.model_validate(row) for row in rows]

    def delete(self, id: int) -> None:
        with translate_errors():
            with self.session_factory.begin() as db:
                # tasks lose the label along with it
                db.query(TaskLabel).filter(TaskLabel.label_id == id).delete(
                    synchronize_session=False
                )
                deleted = db.query(LabelModel).filter(LabelModel.id == id).delete(
                    synchronize_session=False
                )
                if not deleted:
                    raise NotFound(id)

        logger.debug("Deleted label %s", id)


class LabelRepositoryForMemory:
    def __init__(self):
        self._store: Dict[int, Label] = {}
        self._lock = ReadWriteLock()
        self._next_id = 1

    def create(self, name: str) -> Label:
        with self._lock.write():
            for label in self._store.values():
                if label.name == name:
                    raise Duplicate(label.id)

            label = Label(id=self._next_id, name=name)
            self._store[label.id] = label
            self._next_id += 1
            return label

    def all(self) -> List[Label]:
        with self._lock.read():
            return [self._store[id] for id in sorted(self._store)]

    def delete(self, id: int) -> None:
        with self._lock.write():
            if self._store.pop(id, None) is None:
                raise NotFound(id)

    def lookup(self, ids: Iterable[int]) -> Dict[int, Label]:
        """Labels for the ids that still exist; unknown ids are skipped."""
        with self._lock.read():
            return {id: self._store[id] for id in ids if id in self._store}
