from typing import Dict, Iterable, List

from my_todo.api.todo.label.schemas import Label
from .schemas import Task, TaskWithLabelRow


def fold_entities(rows: Iterable[TaskWithLabelRow]) -> List[Task]:
    """
    Rebuild tasks with their labels from flat join rows.

    A task with N labels arrives as N rows sharing the task id; a task with no
    labels arrives as a single row whose label columns are null. Tasks come
    back in the order their id first appears in ``rows`` and labels in the
    order they appear for that task. Nothing is re-sorted.
    """
    accum: Dict[int, Task] = {}
    for row in rows:
        task = accum.get(row.id)
        if task is None:
            task = Task(id=row.id, text=row.text, completed=row.completed, labels=[])
            accum[row.id] = task

        if row.label_id is None:
            continue
        if any(label.id == row.label_id for label in task.labels):
            continue
        task.labels.append(Label(id=row.label_id, name=row.label_name))

    return list(accum.values())
