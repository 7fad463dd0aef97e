"""Domain-level exceptions.

Data-quality problems (bad fields, dangling references, priority gaps) are
returned as structured results, not raised. These exceptions are for the
cases a caller cannot continue from, so the CLI layer can catch them
uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class SchemaShapeError(ValidationError):
    """A collection has the wrong top-level shape (e.g. not an array)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CatalogLoadError(DomainException):
    """A catalog file could not be read or parsed."""
