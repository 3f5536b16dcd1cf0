"""SQLAlchemy ORM database models for the Breachsim platform.

Defines the asset inventory, threat actor catalogue and simulation run
history using SQLAlchemy 2.0 declarative mapping with ``Mapped`` type
annotations. All models inherit from ``Base`` which maps dict and list
annotations to JSONB on PostgreSQL and to generic JSON elsewhere.

These rows are owned by the inventory and audit collaborators. The
simulation core only ever sees the frozen value types they are converted
into (see ``breachsim.services.inventory_service``).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JSONVariant = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        dict[str, Any]: JSONVariant,
        list[Any]: JSONVariant,
    }


class Asset(Base):
    """A network asset in the inventory (workstation, server, firewall, ...)."""

    __tablename__ = "assets"

    asset_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="online")
    criticality: Mapped[str] = mapped_column(String(16), default="medium")
    ip_address: Mapped[str | None] = mapped_column(String(64))
    owner: Mapped[str | None] = mapped_column(String(256))

    # Simulation attributes
    security_controls: Mapped[list[Any]] = mapped_column(default=list)
    data_volume_gb: Mapped[float | None] = mapped_column(Float)

    last_seen: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class ThreatActor(Base):
    """A tracked adversary with its capability profile."""

    __tablename__ = "threat_actors"

    actor_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    origin: Mapped[str | None] = mapped_column(String(128))
    description: Mapped[str | None] = mapped_column(Text)
    sophistication: Mapped[str] = mapped_column(String(32), default="Novice")
    aliases: Mapped[list[Any]] = mapped_column(default=list)
    evasion_techniques: Mapped[list[Any]] = mapped_column(default=list)


class SimulationRun(Base):
    """Audit record of a completed breach simulation."""

    __tablename__ = "simulation_runs"

    run_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(256), nullable=False)
    actor_name: Mapped[str] = mapped_column(String(256), nullable=False)
    entry_asset_id: Mapped[str] = mapped_column(String(128), nullable=False)
    target_asset_id: Mapped[str] = mapped_column(String(128), nullable=False)

    paths: Mapped[list[Any]] = mapped_column(default=list)
    choke_points: Mapped[dict[str, Any]] = mapped_column(default=dict)
    success_probability: Mapped[float] = mapped_column(Float, default=0.0)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
