from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from src.config.constants import API_PREFIX
from src.controllers.commands_controller import CommandsController
from src.data.interface import CommandRepository, CommandStore
from src.mapping.command_mapper import CommandMapper
from src.models.requests import CommandCreateDto, CommandUpdateDto
from src.models.responses import (
    CommandReadDto,
    ErrorResponse,
    ValidationErrorResponse,
)


# Initialize router
router = APIRouter(
    prefix=API_PREFIX,
    tags=["Commands"],
    responses={404: {"description": "Not found", "model": ErrorResponse}},
)


# Dependency functions
def get_store(request: Request) -> CommandStore:
    """Process-wide command store created in the app lifespan"""
    return request.app.state.command_store


def get_mapper(request: Request) -> CommandMapper:
    """Mapping rules built once in the app lifespan"""
    return request.app.state.command_mapper


def get_repository(store: CommandStore = Depends(get_store)) -> CommandRepository:
    """Fresh unit of work for each request"""
    return store.open_repository()


def get_controller(
    repository: CommandRepository = Depends(get_repository),
    mapper: CommandMapper = Depends(get_mapper),
) -> CommandsController:
    return CommandsController(repository, mapper)


@router.get("", response_model=List[CommandReadDto])
async def get_all_commands(
    controller: CommandsController = Depends(get_controller),
) -> List[CommandReadDto]:
    """
    List every stored command
    """
    return await controller.get_all_commands()


@router.get(
    "/{command_id}",
    response_model=CommandReadDto,
    name="get_command_by_id",
)
async def get_command_by_id(
    command_id: int,
    controller: CommandsController = Depends(get_controller),
) -> CommandReadDto:
    """
    Get a single command by id
    """
    return await controller.get_command_by_id(command_id)


@router.post(
    "",
    response_model=CommandReadDto,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid payload", "model": ValidationErrorResponse}},
)
async def create_command(
    payload: CommandCreateDto,
    request: Request,
    response: Response,
    controller: CommandsController = Depends(get_controller),
) -> CommandReadDto:
    """
    Create a command. The response carries a Location header pointing at
    the new resource.
    """
    created = await controller.create_command(payload)
    response.headers["Location"] = str(
        request.url_for("get_command_by_id", command_id=created.id)
    )
    return created


@router.put(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"description": "Invalid payload", "model": ValidationErrorResponse}},
)
async def update_command(
    command_id: int,
    payload: CommandUpdateDto,
    controller: CommandsController = Depends(get_controller),
) -> Response:
    """
    Replace the content of an existing command
    """
    await controller.update_command(command_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_command(
    command_id: int,
    controller: CommandsController = Depends(get_controller),
) -> Response:
    """
    Delete a command
    """
    await controller.delete_command(command_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
