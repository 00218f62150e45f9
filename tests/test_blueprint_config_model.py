"""In-memory behaviour of configuration rows; no database involved."""
import pytest

from apps.models.blueprint_config import (
    BlueprintConfigKey,
    BlueprintConfiguration,
    from_row,
    to_row,
)
from apps.models.blueprints import Blueprint


def test_fields_read_back_exactly_as_constructed():
    record = BlueprintConfiguration(
        blueprint_name="cluster1", type="core-site", config_data='{"a":"1"}'
    )

    assert record.blueprint_name == "cluster1"
    assert record.type == "core-site"
    assert record.config_data == '{"a":"1"}'


def test_setters_store_values_without_validation():
    record = BlueprintConfiguration()
    record.blueprint_name = "cluster1"
    record.type = "hdfs-site"
    record.config_data = "not json at all"

    assert record.blueprint_name == "cluster1"
    assert record.type == "hdfs-site"
    assert record.config_data == "not json at all"


def test_parent_reference_round_trip():
    parent = Blueprint(blueprint_name="cluster1", stack_name="HDP", stack_version="2.1")
    record = BlueprintConfiguration(blueprint_name="cluster1", type="core-site", config_data="{}")

    record.blueprint = parent

    assert record.blueprint is parent


def test_mismatched_parent_is_not_reconciled():
    parent = Blueprint(blueprint_name="cluster2", stack_name="HDP", stack_version="2.1")
    record = BlueprintConfiguration(blueprint_name="cluster1", type="core-site", config_data="{}")

    record.blueprint = parent

    assert record.blueprint_name == "cluster1"
    assert record.blueprint.blueprint_name == "cluster2"
    assert parent.configurations == []


def test_key_is_composite_of_name_and_type():
    first = BlueprintConfiguration(blueprint_name="cluster1", type="core-site", config_data='{"a":"1"}')
    second = BlueprintConfiguration(blueprint_name="cluster1", type="core-site", config_data='{"a":"2"}')
    other = BlueprintConfiguration(blueprint_name="cluster1", type="hdfs-site", config_data='{"a":"1"}')

    assert first.key == second.key == BlueprintConfigKey("cluster1", "core-site")
    assert first.key != other.key
    assert len({first.key, second.key, other.key}) == 2


def test_key_is_immutable():
    key = BlueprintConfigKey("cluster1", "core-site")

    with pytest.raises(AttributeError):
        key.type = "hdfs-site"
    assert key == ("cluster1", "core-site")


def test_row_mapping_uses_column_names():
    record = BlueprintConfiguration(blueprint_name="cluster1", type="core-site", config_data='{"a":"1"}')

    row = to_row(record)

    assert row == {"blueprint_name": "cluster1", "type_name": "core-site", "config_data": '{"a":"1"}'}
    restored = from_row(row)
    assert restored.key == record.key
    assert restored.config_data == record.config_data
    assert restored.blueprint is None
