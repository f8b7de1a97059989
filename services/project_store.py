import json
import logging

from pydantic import ValidationError as PydanticValidationError

from models.schemas import Project

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class ProjectStore:
    """Persists the single project as one JSON document under a well-known key."""

    def __init__(self, conn, key: str):
        self.conn = conn
        self.key = key

    def load(self) -> Project:
        """Read the stored project, falling back to an empty one if unusable."""
        payload = self.conn.get(self.key)
        if payload is None:
            return Project()

        try:
            document = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable project record: {str(e)}")
            return Project()

        if not isinstance(document, dict):
            logger.warning("Ignoring project record that is not a JSON object")
            return Project()

        # Records written before versioning are a bare project object
        version = document.get("version", SCHEMA_VERSION)
        project_data = document.get("project", document)
        if version != SCHEMA_VERSION:
            logger.warning(f"Ignoring project record with unsupported version {version}")
            return Project()

        try:
            return Project.model_validate(project_data)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring invalid project record: {e.error_count()} error(s)")
            return Project()

    def save(self, project: Project) -> None:
        document = {"version": SCHEMA_VERSION, "project": project.to_wire()}
        self.conn.set(self.key, json.dumps(document))
        logger.info(f"Saved project with {len(project.bids)} bid(s)")

    def clear(self) -> None:
        self.conn.delete(self.key)
        logger.info("Cleared stored project")
