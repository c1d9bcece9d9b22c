"""Project persistence."""

from .project_store import ProjectFormatError, ProjectStore

__all__ = ['ProjectFormatError', 'ProjectStore']
