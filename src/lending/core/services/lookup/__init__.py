from .book_lookup import BookMetadata, BookMetadataService

__all__ = ["BookMetadata", "BookMetadataService"]
