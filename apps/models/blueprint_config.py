"""
Blueprint configuration rows.

Each row holds the JSON text of one configuration type (for example
``core-site``) for a single blueprint. Rows are identified by the pair
(blueprint name, type) and are written once: they are inserted together with
their blueprint and only ever go away when that blueprint is deleted.
"""

from typing import Any, Dict, NamedTuple

from sqlalchemy import Column, ForeignKey, String, Text, event, inspect
from sqlalchemy.orm import relationship

from apps.errors import ImmutableRecordError
from core.db import Base


class BlueprintConfigKey(NamedTuple):
    """Composite identity of a configuration row.

    Being a tuple, it can be passed straight to ``AsyncSession.get``.
    """

    blueprint_name: str
    type: str


class BlueprintConfiguration(Base):
    __tablename__ = "blueprint_configuration"

    blueprint_name = Column(
        "blueprint_name",
        String(255),
        ForeignKey("blueprint.blueprint_name", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )
    type = Column("type_name", String(255), primary_key=True, nullable=False)
    config_data = Column("config_data", Text, nullable=False)

    # Many-to-one lookup of the owning blueprint. Assigning it leaves
    # blueprint_name untouched until the session flushes, and does not add
    # this row to Blueprint.configurations.
    blueprint = relationship("Blueprint", lazy="joined", overlaps="configurations")

    @property
    def key(self) -> BlueprintConfigKey:
        return BlueprintConfigKey(self.blueprint_name, self.type)

    def __repr__(self) -> str:
        return (
            f"BlueprintConfiguration(blueprint_name={self.blueprint_name!r}, "
            f"type={self.type!r})"
        )


WRITE_ONCE_ATTRIBUTES = ("blueprint_name", "type", "config_data")


@event.listens_for(BlueprintConfiguration, "before_update")
def _reject_updates(mapper, connection, target):
    state = inspect(target)
    changed = [name for name in WRITE_ONCE_ATTRIBUTES if state.attrs[name].history.has_changes()]
    if changed:
        raise ImmutableRecordError(
            f"Configuration {target.key} is write-once; attempted to change {', '.join(changed)}"
        )


def to_row(record: BlueprintConfiguration) -> Dict[str, Any]:
    """Flatten a record into a mapping keyed by column name."""
    return {
        "blueprint_name": record.blueprint_name,
        "type_name": record.type,
        "config_data": record.config_data,
    }


def from_row(row: Dict[str, Any]) -> BlueprintConfiguration:
    """Build a transient record from a mapping keyed by column name.

    The parent reference is left unset; it resolves through the session
    once the record is attached.
    """
    return BlueprintConfiguration(
        blueprint_name=row["blueprint_name"],
        type=row["type_name"],
        config_data=row["config_data"],
    )
