"""JSON-file implementation of ProjectRepository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskflow.adapters.jsonfile.collection_store import JsonCollectionStore
from taskflow.adapters.jsonfile.utils import (
    find_index,
    now_utc,
    record_to_model,
    records_to_models,
)
from taskflow.errors import NotFoundError
from taskflow.models import Project, ProjectCreate, parse_model
from taskflow.repositories import ProjectRepository
from taskflow.utils.id_utils import generate_id

PROJECTS_COLLECTION = "projects"


class JsonProjectRepository(ProjectRepository):
    """Project repository backed by the ``projects`` collection."""

    collection = PROJECTS_COLLECTION

    def __init__(self, store: JsonCollectionStore):
        """Initialize the repository.

        Args:
            store: Collection store holding the projects collection
        """
        self.store = store

    async def list_all(self) -> list[Project]:
        """List all projects in insertion order."""
        records = await self.store.load(self.collection)
        return records_to_models(Project, records, self.collection)

    async def get(self, project_id: str) -> Project:
        """Get a specific project by ID."""
        records = await self.store.load(self.collection)
        index = find_index(records, project_id)
        if index < 0:
            raise NotFoundError("Project", project_id)
        return record_to_model(Project, records[index], self.collection)

    async def create(self, project_data: ProjectCreate | Mapping[str, Any]) -> Project:
        """Create a new project."""
        data = parse_model(ProjectCreate, project_data)
        project = Project(
            id=generate_id(),
            name=data.name,
            description=data.description,
            created_at=now_utc(),
        )

        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            records.append(project.to_record())
            await self.store.save(self.collection, records)

        return project

    async def delete(self, project_id: str) -> bool:
        """Delete a project."""
        async with self.store.lock(self.collection):
            records = await self.store.load(self.collection)
            remaining = [
                r for r in records if not (isinstance(r, dict) and r.get("id") == project_id)
            ]
            if len(remaining) == len(records):
                raise NotFoundError("Project", project_id)
            await self.store.save(self.collection, remaining)

        return True
