"""Exception types raised by the documentation resolver."""


class ApiDocError(Exception):
    """Base class for fatal resolver errors."""


class InvalidScopedNameError(ApiDocError, ValueError):
    """A scoped package name such as "@scope" is missing its "/package" part."""


class DescriptorValidationError(ApiDocError):
    """An external *.api.json descriptor does not conform to the schema."""


class ProjectNotFoundError(ApiDocError):
    """The project folder does not contain a package.json file."""


class DeclarationFormatError(ApiDocError):
    """The declaration tree handed over by the front end is malformed."""
