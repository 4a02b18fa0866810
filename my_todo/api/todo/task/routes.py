from fastapi import APIRouter, Depends, HTTPException, Response, status

from my_todo.api.deps import get_task_repository
from my_todo.core.exceptions import NotFound, Unexpected
from . import schemas
from .services import TaskRepository

router = APIRouter()


@router.post("", response_model=schemas.Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task: schemas.TaskCreate,
    repository: TaskRepository = Depends(get_task_repository)
):
    try:
        return repository.create(task)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("", response_model=list[schemas.Task])
def all_tasks(repository: TaskRepository = Depends(get_task_repository)):
    try:
        return repository.all()
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/{task_id}", response_model=schemas.Task)
def find_task(
    task_id: int,
    repository: TaskRepository = Depends(get_task_repository)
):
    try:
        return repository.find(task_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.patch("/{task_id}", response_model=schemas.Task, status_code=status.HTTP_201_CREATED)
def update_task(
    task_id: int,
    task: schemas.TaskUpdate,
    repository: TaskRepository = Depends(get_task_repository)
):
    try:
        return repository.update(task_id, task)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    repository: TaskRepository = Depends(get_task_repository)
):
    try:
        repository.delete(task_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
