from dataclasses import dataclass

from src.lending.core.services import BookMetadataService, DbSessionService
from src.lending.core.services.catalog import CategoryTable


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    metadata_service: BookMetadataService
    categories: CategoryTable
