from fastapi import APIRouter, Depends, HTTPException, Response, status

from my_todo.api.deps import get_label_repository
from my_todo.core.exceptions import Duplicate, NotFound, Unexpected
from . import schemas
from .services import LabelRepository

router = APIRouter()

@router.post("", response_model=schemas.Label, status_code=status.HTTP_201_CREATED)
def create_label(
    label: schemas.LabelCreate,
    repository: LabelRepository = Depends(get_label_repository)
):
    try:
        return repository.create(label.name)
    except Duplicate as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("", response_model=list[schemas.Label])
def all_labels(repository: LabelRepository = Depends(get_label_repository)):
    try:
        return repository.all()
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_label(
    label_id: int,
    repository: LabelRepository = Depends(get_label_repository)
):
    try:
        repository.delete(label_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unexpected as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
