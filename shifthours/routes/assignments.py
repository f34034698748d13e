# shifthours/routes/assignments.py
"""Assignment routes - write-path validation before create/update."""

from fastapi import APIRouter

from shifthours.core.hours import validate_assignment
from shifthours.routes.shared import AssignmentValidationRequest

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.post("/validate", name="validate_assignment")
def validate(body: AssignmentValidationRequest):
    """
    Validate a proposed assignment against the other assignments of its work-day.

    Returns the normalized assignment. Rejections are raised as
    AssignmentValidationError and rendered by the application's error handler.
    """
    task_types = {task_type.id: task_type for task_type in body.task_types}
    assignment = validate_assignment(body.assignment, body.workday_assignments, task_types)
    return {"valid": True, "assignment": assignment.model_dump(by_alias=True, mode="json")}
