"""Async data access for blueprints and their configuration rows.

Nothing here catches storage errors: a duplicate key, a null column or a
missing parent surfaces as ``sqlalchemy.exc.IntegrityError`` from the flush.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from apps.models.blueprint_config import BlueprintConfigKey, BlueprintConfiguration
from apps.models.blueprints import Blueprint

logger = logging.getLogger(__name__)


async def create_blueprint(db: AsyncSession, blueprint: Blueprint) -> Blueprint:
    db.add(blueprint)
    await db.flush()
    logger.info("Created blueprint %s", blueprint.blueprint_name)
    return blueprint


async def get_blueprint(db: AsyncSession, name: str) -> Optional[Blueprint]:
    logger.debug("Looking up blueprint %s", name)
    return await db.get(Blueprint, name)


async def list_blueprints(db: AsyncSession) -> List[Blueprint]:
    result = await db.execute(select(Blueprint).order_by(Blueprint.blueprint_name))
    return list(result.scalars().all())


async def delete_blueprint(db: AsyncSession, name: str) -> bool:
    blueprint = await get_blueprint(db, name)
    if blueprint is None:
        return False
    await db.delete(blueprint)
    await db.flush()
    logger.info("Deleted blueprint %s and its configurations", name)
    return True


async def add_configuration(db: AsyncSession, record: BlueprintConfiguration) -> BlueprintConfiguration:
    # Insert only; rows are never updated in place
    db.add(record)
    await db.flush()
    logger.info("Added configuration %s to blueprint %s", record.type, record.blueprint_name)
    return record


async def get_configuration(db: AsyncSession, key: BlueprintConfigKey) -> Optional[BlueprintConfiguration]:
    logger.debug("Looking up configuration %s", key)
    return await db.get(BlueprintConfiguration, key)


async def list_configurations(db: AsyncSession, blueprint_name: str) -> List[BlueprintConfiguration]:
    result = await db.execute(
        select(BlueprintConfiguration)
        .where(BlueprintConfiguration.blueprint_name == blueprint_name)
        .order_by(BlueprintConfiguration.type)
    )
    return list(result.scalars().unique().all())
