"""
Task use cases for the application layer.
Implements the write operations on tasks.
"""

from task_tracker.application.use_cases.base_use_case import TaskUseCase, CommandUseCase
from task_tracker.application.dto.task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    ChangeTaskStatusRequestDTO,
    DeleteTaskRequestDTO,
    DeleteTaskResponseDTO,
    TaskResponseDTO,
)
from task_tracker.domain.models.base import ValidationError
from task_tracker.domain.models.task import Task


class CreateTaskUseCase(TaskUseCase[CreateTaskRequestDTO, TaskResponseDTO],
                        CommandUseCase[CreateTaskRequestDTO, TaskResponseDTO]):
    """Use case for creating a new task."""

    async def _execute_command_logic(self, request: CreateTaskRequestDTO) -> TaskResponseDTO:
        task = Task.create(
            title=request.title,
            owner_id=self.current_user_id,
            description=request.description,
            start_date=request.start_date,
            deadline=request.deadline,
        )

        saved_task = await self.task_repository.save(task)
        self._collect_events(saved_task)

        return TaskResponseDTO.from_domain(saved_task)


class UpdateTaskUseCase(TaskUseCase[UpdateTaskRequestDTO, TaskResponseDTO],
                        CommandUseCase[UpdateTaskRequestDTO, TaskResponseDTO]):
    """Use case for updating task fields."""

    async def _execute_command_logic(self, request: UpdateTaskRequestDTO) -> TaskResponseDTO:
        task = await self._get_owned_task(request.task_id)

        changes = {
            "title": request.title,
            "status": request.status,
            "start_date": request.start_date,
        }
        # An explicit null clears the field, an absent one keeps it
        for field in ("description", "deadline"):
            if field in request.model_fields_set:
                changes[field] = getattr(request, field)

        task.update(**changes)

        updated_task = await self.task_repository.update(task)
        self._collect_events(updated_task)

        return TaskResponseDTO.from_domain(updated_task)


class ChangeTaskStatusUseCase(TaskUseCase[ChangeTaskStatusRequestDTO, TaskResponseDTO],
                              CommandUseCase[ChangeTaskStatusRequestDTO, TaskResponseDTO]):
    """
    Use case for status transitions.
    A plain status goes through the general transition table; the start,
    complete and reopen actions use the dedicated entity methods.
    """

    async def _validate_request(self, request: ChangeTaskStatusRequestDTO) -> None:
        await super()._validate_request(request)
        if not request.status and not request.action:
            raise ValidationError("Either status or action is required", "status")
        if request.status and request.action:
            raise ValidationError("Send either status or action, not both", "action")

    async def _execute_command_logic(self, request: ChangeTaskStatusRequestDTO) -> TaskResponseDTO:
        task = await self._get_owned_task(request.task_id)

        if request.action == "start":
            task.mark_as_in_progress()
        elif request.action == "complete":
            task.mark_as_completed()
        elif request.action == "reopen":
            task.reopen()
        else:
            task.update_status(request.status)

        updated_task = await self.task_repository.update(task)
        self._collect_events(updated_task)

        return TaskResponseDTO.from_domain(updated_task)

    async def mark_as_in_progress(self, task_id: int) -> TaskResponseDTO:
        return await self.execute(ChangeTaskStatusRequestDTO(task_id=task_id, action="start"))

    async def mark_as_completed(self, task_id: int) -> TaskResponseDTO:
        return await self.execute(ChangeTaskStatusRequestDTO(task_id=task_id, action="complete"))

    async def reopen(self, task_id: int) -> TaskResponseDTO:
        return await self.execute(ChangeTaskStatusRequestDTO(task_id=task_id, action="reopen"))


class DeleteTaskUseCase(TaskUseCase[DeleteTaskRequestDTO, DeleteTaskResponseDTO],
                        CommandUseCase[DeleteTaskRequestDTO, DeleteTaskResponseDTO]):
    """
    Use case for deleting tasks.
    By default the task is cancelled (soft delete); permanent deletes remove
    the record in any status.
    """

    async def _execute_command_logic(self, request: DeleteTaskRequestDTO) -> DeleteTaskResponseDTO:
        task = await self._get_owned_task(request.task_id)

        if request.permanent:
            deleted = await self.task_repository.delete(request.task_id)
            return DeleteTaskResponseDTO(
                task_id=request.task_id,
                success=deleted,
                permanent=True,
                message="Task deleted permanently" if deleted else "Task could not be deleted",
            )

        task.cancel_task()
        updated_task = await self.task_repository.update(task)
        self._collect_events(updated_task)

        return DeleteTaskResponseDTO(
            task_id=request.task_id,
            success=True,
            message="Task cancelled successfully",
        )
