from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from apps.models.blueprint_config import BlueprintConfiguration
from core.db import Base

class Blueprint(Base):
    __tablename__ = "blueprint"

    blueprint_name = Column(String(255), primary_key=True)
    stack_name = Column(String(255), nullable=False)
    stack_version = Column(String(255), nullable=False)

    # The blueprint owns its configuration rows; removing it removes them.
    # Not linked to BlueprintConfiguration.blueprint, so assigning one side
    # never updates the other in memory.
    configurations = relationship(
        BlueprintConfiguration,
        cascade="save-update, merge, delete",
        passive_deletes=True,
        lazy="selectin",
        order_by=BlueprintConfiguration.type,
        overlaps="blueprint",
    )

    def __repr__(self) -> str:
        return (
            f"Blueprint(blueprint_name={self.blueprint_name!r}, "
            f"stack_name={self.stack_name!r}, stack_version={self.stack_version!r})"
        )
