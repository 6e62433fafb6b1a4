# api.py
"""HTTP API for the tracker (FastAPI).

Authentication happens upstream; the gateway forwards the caller's user id
in the ``X-User-Id`` header. Responses use the envelope
``{"statusCode", "data", "message"}``; errors omit ``data``.
"""

import logging
import os
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlmodel import Session

import db
from errors import TrackerError, AuthenticationError
from managers import project_manager, task_manager
from utils.auth import Actor
from utils.logs import setup_logger

logger = logging.getLogger(__name__)

__version__ = "2.0.0"


class ProjectRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class AssignRequest(BaseModel):
    userid: Optional[int] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class RemoveUserRequest(BaseModel):
    userId: Optional[int] = None


class TaskRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    score: Optional[int] = None


class TaskUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProgressRequest(BaseModel):
    status: Optional[str] = None


def api_response(status_code: int, data: Any, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"statusCode": status_code, "data": data, "message": message}),
    )


def get_actor(x_user_id: Optional[int] = Header(default=None),
              session: Session = Depends(db.get_session)) -> Actor:
    if x_user_id is None:
        raise AuthenticationError("Unauthorized request")
    user = db.get_user(session, x_user_id)
    if not user:
        raise AuthenticationError("Invalid access token")
    return Actor.from_user(user)


router = APIRouter()


# ---- projects ----
@router.post("/projects")
def create_project(body: ProjectRequest, actor: Actor = Depends(get_actor),
                   session: Session = Depends(db.get_session)):
    project = project_manager.create_project(session, actor, body.name, body.description)
    return api_response(200, project, "Project created successfully")


@router.get("/projects")
def list_projects(actor: Actor = Depends(get_actor), session: Session = Depends(db.get_session)):
    projects = project_manager.list_projects(session, actor)
    if not projects:
        return api_response(404, [], "No projects found")
    return api_response(200, projects, "Projects retrieved successfully")


@router.get("/projects/{project_id}")
def get_project(project_id: int, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    project = project_manager.get_project(session, actor, project_id)
    return api_response(200, project, "Project fetched successfully")


@router.patch("/projects/{project_id}")
def update_project(project_id: int, body: ProjectRequest, actor: Actor = Depends(get_actor),
                   session: Session = Depends(db.get_session)):
    project = project_manager.update_project(session, actor, project_id, body.name, body.description)
    return api_response(200, project, "Project updated successfully")


@router.delete("/projects/{project_id}")
def delete_project(project_id: int, actor: Actor = Depends(get_actor),
                   session: Session = Depends(db.get_session)):
    project_manager.delete_project(session, actor, project_id)
    return api_response(200, {}, "Project deleted successfully")


@router.post("/projects/assign/{project_id}")
def assign_user(project_id: int, body: AssignRequest, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    project = project_manager.assign_user(session, actor, project_id, body.userid,
                                          body.startDate, body.endDate)
    return api_response(
        200, project, "User is assigned to project and progress has been created for all tasks"
    )


@router.delete("/projects/assign/{project_id}")
def remove_user(project_id: int, body: RemoveUserRequest, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    project = project_manager.remove_user(session, project_id, body.userId)
    if project is None:
        return JSONResponse(status_code=404, content={"message": "User not assigned to this project"})
    return api_response(200, {"project": project}, "Project assignees updated successfully")


# ---- tasks ----
@router.post("/tasks/{project_id}")
def create_task(project_id: int, body: TaskRequest, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    task = task_manager.create_task(session, actor, project_id, body.name, body.description, body.score)
    return api_response(201, {"task": task}, "Task created successfully")


@router.get("/tasks/t/{task_id}")
def get_task(task_id: int, actor: Actor = Depends(get_actor),
             session: Session = Depends(db.get_session)):
    detail = task_manager.get_task(session, actor, task_id)
    return api_response(200, detail, "Task details retrieved successfully")


@router.patch("/tasks/t/{task_id}")
def update_task(task_id: int, body: TaskUpdateRequest, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    task = task_manager.update_task(session, actor, task_id, body.name, body.description)
    return api_response(200, task, "Task updated successfully")


@router.delete("/tasks/t/{task_id}")
def delete_task(task_id: int, actor: Actor = Depends(get_actor),
                session: Session = Depends(db.get_session)):
    task_manager.delete_task(session, actor, task_id)
    return api_response(200, {}, "Task deleted successfully")


@router.post("/tasks/t/{task_id}")
def update_progress(task_id: int, body: ProgressRequest, actor: Actor = Depends(get_actor),
                    session: Session = Depends(db.get_session)):
    progress = task_manager.update_progress(session, actor, task_id, body.status)
    return api_response(200, progress, "Task progress updated successfully")


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code,
                        content={"statusCode": exc.status_code, "message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body errors are the caller's bad input (400); path/header errors keep FastAPI's 422."""
    body_errors = [e for e in exc.errors() if e.get("loc") and e["loc"][0] == "body"]
    if not body_errors:
        return await request_validation_exception_handler(request, exc)
    first = body_errors[0]
    field = "" if first.get("type") == "json_invalid" else ".".join(str(p) for p in first["loc"][1:])
    message = f"Invalid value for {field}: {first['msg']}" if field else f"Invalid request body: {first['msg']}"
    logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"statusCode": 400, "message": message})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"statusCode": 500, "message": "Internal server error"})


def create_app(init_tables: bool = True) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Scoreboard PM",
        description="Projects, assignments, scored tasks and per-user progress",
        version=__version__,
    )
    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    app.include_router(router)
    if init_tables:
        db.init_db()
    logger.info("API ready (database: %s)", db.engine.url.render_as_string(hide_password=True))
    return app


def main() -> None:
    import uvicorn

    setup_logger()
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
