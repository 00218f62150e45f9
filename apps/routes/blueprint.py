import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from apps.errors import DuplicateConfigurationError, InvalidConfigurationError
from apps.models.blueprint_config import BlueprintConfigKey, BlueprintConfiguration
from apps.models.blueprints import Blueprint
from apps.repositories import blueprint_repository
from apps.schemas.blueprint import (
    BlueprintConfigurationResponse,
    BlueprintCreateRequest,
    BlueprintResponse,
)
from apps.services.blueprint_service import create_blueprint_with_configurations, parse_config_data
from core.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blueprints", tags=["Blueprint"])


def _configuration_response(record: BlueprintConfiguration) -> BlueprintConfigurationResponse:
    try:
        properties = parse_config_data(record)
    except InvalidConfigurationError as e:
        logger.error("Stored configuration is unreadable: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return BlueprintConfigurationResponse(
        blueprint_name=record.blueprint_name,
        type=record.type,
        properties=properties,
    )


def _blueprint_response(blueprint: Blueprint) -> BlueprintResponse:
    return BlueprintResponse(
        blueprint_name=blueprint.blueprint_name,
        stack_name=blueprint.stack_name,
        stack_version=blueprint.stack_version,
        configurations=[_configuration_response(c) for c in blueprint.configurations],
    )


@router.post("", response_model=BlueprintResponse, status_code=status.HTTP_201_CREATED)
async def create_blueprint(
    request: BlueprintCreateRequest,
    db: AsyncSession = Depends(get_db)
):
    if await blueprint_repository.get_blueprint(db, request.blueprint_name) is not None:
        raise HTTPException(status_code=409, detail=f"Blueprint {request.blueprint_name} already exists")

    try:
        blueprint = await create_blueprint_with_configurations(db, request)
    except DuplicateConfigurationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        logger.warning("Rejected blueprint %s: %s", request.blueprint_name, e.orig)
        raise HTTPException(status_code=409, detail=f"Blueprint {request.blueprint_name} conflicts with stored data")

    return _blueprint_response(blueprint)


@router.get("", response_model=List[BlueprintResponse])
async def list_blueprints(db: AsyncSession = Depends(get_db)):
    return [_blueprint_response(b) for b in await blueprint_repository.list_blueprints(db)]


@router.get("/{name}", response_model=BlueprintResponse)
async def get_blueprint(name: str, db: AsyncSession = Depends(get_db)):
    blueprint = await blueprint_repository.get_blueprint(db, name)
    if not blueprint:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return _blueprint_response(blueprint)


@router.get("/{name}/configurations", response_model=List[BlueprintConfigurationResponse])
async def list_configurations(name: str, db: AsyncSession = Depends(get_db)):
    if not await blueprint_repository.get_blueprint(db, name):
        raise HTTPException(status_code=404, detail="Blueprint not found")
    records = await blueprint_repository.list_configurations(db, name)
    return [_configuration_response(r) for r in records]


@router.get("/{name}/configurations/{config_type}", response_model=BlueprintConfigurationResponse)
async def get_configuration(name: str, config_type: str, db: AsyncSession = Depends(get_db)):
    record = await blueprint_repository.get_configuration(db, BlueprintConfigKey(name, config_type))
    if not record:
        raise HTTPException(status_code=404, detail="Configuration not found")
    return _configuration_response(record)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blueprint(name: str, db: AsyncSession = Depends(get_db)):
    if not await blueprint_repository.delete_blueprint(db, name):
        raise HTTPException(status_code=404, detail="Blueprint not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
