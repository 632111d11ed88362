"""
label_import/connectors package marker.
"""

from label_import.connectors.base import BaseConnector, ConnectorFetchResult, ConnectorRequestError
from label_import.connectors.project_directory import (
    ProjectDirectoryCache,
    ProjectDirectoryConnector,
    get_project_directory_cache,
)

__all__ = [
    "BaseConnector",
    "ConnectorFetchResult",
    "ConnectorRequestError",
    "ProjectDirectoryCache",
    "ProjectDirectoryConnector",
    "get_project_directory_cache",
]
