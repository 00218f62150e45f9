import json
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from apps.errors import DuplicateConfigurationError, InvalidConfigurationError
from apps.models.blueprint_config import BlueprintConfiguration
from apps.models.blueprints import Blueprint
from apps.repositories import blueprint_repository
from apps.schemas.blueprint import BlueprintCreateRequest

logger = logging.getLogger(__name__)


def build_configurations(blueprint_name: str, groups: List[Any]) -> List[BlueprintConfiguration]:
    """Turn ``[{"<type>": {<properties>}}, ...]`` into configuration rows.

    Each group must hold exactly one type. Properties are stored as JSON text
    without further inspection.
    """
    seen = set()
    records = []
    for group in groups:
        if not isinstance(group, Mapping) or len(group) != 1:
            raise InvalidConfigurationError(
                f"Configuration group must map a single type to its properties, got {group!r}"
            )
        (config_type, properties), = group.items()
        if not config_type:
            raise InvalidConfigurationError("Configuration type must not be empty")
        if not isinstance(properties, Mapping):
            raise InvalidConfigurationError(
                f"Properties of configuration {config_type!r} must be an object"
            )
        if config_type in seen:
            raise DuplicateConfigurationError(
                f"Configuration {config_type!r} given more than once for blueprint {blueprint_name!r}"
            )
        seen.add(config_type)
        records.append(
            BlueprintConfiguration(
                blueprint_name=blueprint_name,
                type=config_type,
                config_data=json.dumps(dict(properties)),
            )
        )
    return records


def parse_config_data(record: BlueprintConfiguration) -> Dict[str, Any]:
    try:
        properties = json.loads(record.config_data)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"Configuration {record.key} does not hold valid JSON: {e}")
    if not isinstance(properties, dict):
        raise InvalidConfigurationError(f"Configuration {record.key} does not hold a JSON object")
    return properties


async def create_blueprint_with_configurations(db: AsyncSession, request: BlueprintCreateRequest) -> Blueprint:
    """Persist a blueprint and all its configuration groups in one transaction.

    Each row gets both its blueprint_name and its parent reference here, so
    the two never disagree.
    """
    blueprint = Blueprint(
        blueprint_name=request.blueprint_name,
        stack_name=request.stack_name,
        stack_version=request.stack_version,
        configurations=[],
    )
    for record in build_configurations(request.blueprint_name, request.configurations):
        record.blueprint = blueprint
        blueprint.configurations.append(record)

    try:
        await blueprint_repository.create_blueprint(db, blueprint)
        await db.commit()
    except Exception as e:
        logger.warning("Rolling back blueprint %s: %s", request.blueprint_name, e)
        await db.rollback()
        raise
    return blueprint
