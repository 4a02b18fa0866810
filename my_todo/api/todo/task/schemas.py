from pydantic import BaseModel, Field
from typing import Optional, List

from my_todo.api.todo.label.schemas import Label


class TaskCreate(BaseModel):
    text: str = Field(min_length=1, max_length=100)
    label_ids: List[int] = Field(default_factory=list, alias="labels")

    model_config = {
        "populate_by_name": True
    }

class TaskUpdate(BaseModel):
    text: Optional[str] = Field(default=None, min_length=1, max_length=100)
    completed: Optional[bool] = None
    # None keeps the current labels, [] clears them
    label_ids: Optional[List[int]] = Field(default=None, alias="labels")

    model_config = {
        "populate_by_name": True
    }

class Task(BaseModel):
    id: int
    text: str
    completed: bool = False
    labels: List[Label] = []

class TaskWithLabelRow(BaseModel):
    """One row of ``tasks`` left-joined through ``task_labels`` to ``labels``."""
    id: int
    text: str
    completed: bool
    label_id: Optional[int] = None
    label_name: Optional[str] = None
