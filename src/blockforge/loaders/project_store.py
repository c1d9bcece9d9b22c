"""Project store: scene object collections saved as JSON blobs keyed by project key."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..config.settings import PROJECTS_DIR
from ..core.scene import SceneObject


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


class ProjectFormatError(ValueError):
    """Raised when a stored project blob cannot be decoded."""


class ProjectStore:
    """Opaque blob store for scene object collections, one JSON file per project."""

    def __init__(self, root: Path | str = PROJECTS_DIR):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        """File backing ``key``. Keys are restricted to letters, digits, '-' and '_'."""
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid project key: {key!r}")
        return self.root / f"{key}.json"

    def save(self, key: str, objects: Iterable[SceneObject]) -> Path:
        """Write the collection for ``key``, replacing any previous blob."""

        path = self.path_for(key)
        payload = {
            "version": FORMAT_VERSION,
            "objects": [obj.to_dict() for obj in objects],
        }

        self.root.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        tmp_path.replace(path)

        logger.info("Saved project '%s' (%d objects) to %s", key, len(payload["objects"]), path)
        return path

    def load(self, key: str) -> Optional[Tuple[SceneObject, ...]]:
        """
        Read the collection stored for ``key``.

        Returns:
            The objects, or None if nothing is stored under ``key``

        Raises:
            ProjectFormatError: If the blob is not a valid project
        """

        path = self.path_for(key)
        if not path.exists():
            logger.info("No stored project '%s'", key)
            return None

        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ProjectFormatError(f"Project '{key}' is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("objects"), list):
            raise ProjectFormatError(f"Project '{key}' has no object list")

        try:
            objects = tuple(SceneObject.from_dict(item) for item in payload["objects"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ProjectFormatError(f"Project '{key}' contains an invalid object: {exc}") from exc

        ids = [obj.id for obj in objects]
        if len(ids) != len(set(ids)):
            raise ProjectFormatError(f"Project '{key}' contains duplicate object ids")

        logger.info("Loaded project '%s' (%d objects)", key, len(objects))
        return objects
