# my_todo/db/models/todo/__init__.py
from .task import Task
from .label import Label
from .task_label import TaskLabel
