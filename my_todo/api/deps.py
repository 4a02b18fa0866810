from fastapi import Request

from my_todo.api.todo.label.services import LabelRepository
from my_todo.api.todo.task.services import TaskRepository


def get_task_repository(request: Request) -> TaskRepository:
    return request.app.state.task_repository


def get_label_repository(request: Request) -> LabelRepository:
    return request.app.state.label_repository
