"""Application ports package."""

from .database import DatabaseEnginePort
from .planning_repository import PlanningRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "PlanningRepositoryPort",
]
