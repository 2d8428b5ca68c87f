"""Exceptions raised by the resource services."""


class ResourceServiceError(Exception):
    """Base class for resource operation errors."""


class ResourceValidationError(ResourceServiceError):
    pass


class MissingFieldsError(ResourceValidationError):
    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


class InvalidFieldError(ResourceValidationError):
    def __init__(self, field: str, detail: str | None = None):
        self.field = field
        message = f"Invalid value for {field}"
        super().__init__(f"{message}: {detail}" if detail else message)


class ResourceNotFoundError(ResourceServiceError):
    pass


class RelatedResourceNotFoundError(ResourceNotFoundError):
    pass


class ResourceConflictError(ResourceServiceError):
    pass


class DuplicateValueError(ResourceConflictError):
    pass


class ResourceInUseError(ResourceConflictError):
    pass
