class PetStoreError(Exception):
    """Base exception for pet store errors."""

    pass


class UnsupportedReference(PetStoreError, ValueError):
    """Raised when a resource reference does not fit the requested operation."""

    def __init__(self, message: str, uri: str | None = None):
        super().__init__(message)
        self.uri = uri


class InvalidArgument(PetStoreError, ValueError):
    """Raised when pet values fail validation. Nothing is written."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
