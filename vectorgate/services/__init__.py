"""Service layer: request validation and backend orchestration."""

from vectorgate.services.memory_service import MemoryService

__all__ = ["MemoryService"]
