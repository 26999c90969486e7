"""
Task endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.core.security.permissions import Actor
from app.schemas.common import MessageResponse, SuccessResponse
from app.schemas.task import TaskCreate, TaskListData, TaskResponse, TaskUpdate
from app.services.task import TaskService

router = APIRouter(prefix="/tasks")


@router.post("", response_model=SuccessResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    actor: Actor = Depends(deps.get_current_actor),
    service: TaskService = Depends(deps.get_task_service),
):
    result = service.create_task(actor, payload)
    return SuccessResponse.create(message=result.message, data=TaskResponse.model_validate(result.unwrap()))


@router.get("", response_model=SuccessResponse[TaskListData])
def list_tasks(
    actor: Actor = Depends(deps.get_current_actor),
    service: TaskService = Depends(deps.get_task_service),
):
    tasks = service.list_tasks(actor).unwrap()
    return SuccessResponse.create(
        data=TaskListData(tasks=[TaskResponse.model_validate(t) for t in tasks], count=len(tasks))
    )


@router.get("/{task_id}", response_model=SuccessResponse[TaskResponse])
def get_task(
    task_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: TaskService = Depends(deps.get_task_service),
):
    task = service.get_task(actor, task_id).unwrap()
    return SuccessResponse.create(data=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=SuccessResponse[TaskResponse])
def update_task(
    task_id: str,
    payload: TaskUpdate,
    actor: Actor = Depends(deps.get_current_actor),
    service: TaskService = Depends(deps.get_task_service),
):
    result = service.update_task(actor, task_id, payload)
    return SuccessResponse.create(message=result.message, data=TaskResponse.model_validate(result.unwrap()))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: TaskService = Depends(deps.get_task_service),
):
    result = service.delete_task(actor, task_id)
    result.unwrap()
    return MessageResponse(message=result.message)
