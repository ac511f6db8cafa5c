"""Custom exceptions for Bindery."""



class BinderyError(Exception):
    """Base exception for all Bindery errors."""

    exit_code: int = 1
    default_hint: str | None = None

    def __init__(
        self,
        message: str,
        details: str | None = None,
        hint: str | None = None,
    ):
        self.message = message
        self.details = details
        self.hint = hint or self.default_hint
        super().__init__(message)


# Descriptor errors (10-19)
class DescriptorError(BinderyError):
    """Error related to the project descriptor file."""

    exit_code = 10


class NoDescriptorFound(DescriptorError):
    """No descriptor reachable from the requested root."""

    exit_code = 11
    default_hint = "Run 'bindery init' to create a binder in this directory"


class DescriptorExistsError(DescriptorError):
    """A descriptor already exists at the requested root."""

    exit_code = 12


class DescriptorFormatError(DescriptorError):
    """Descriptor file could not be parsed into a structure."""

    exit_code = 13
    default_hint = "Check the YAML syntax of the binder file"


# Structure errors (20-29)
class StructureError(BinderyError):
    """Error while reading or mutating the binder structure."""

    exit_code = 20


class ItemNotFound(StructureError):
    """Requested id is absent from the structure."""

    exit_code = 21
    default_hint = "Run 'bindery sidebar' to list the ids in this binder"


class ItemExistsError(StructureError):
    """An item with the same id is already in the structure."""

    exit_code = 22


class BoundaryReached(StructureError):
    """Reorder or navigation went past either end of the structure.

    Informational: the structure is left unchanged.
    """

    exit_code = 23


class EndOfSequence(BoundaryReached):
    """No item exists at the requested relative position."""

    exit_code = 24


# Composition errors (30-39)
class FileUnreadable(BinderyError):
    """Backing file of an item could not be read."""

    exit_code = 30
    default_hint = "Use 'bindery relocate' if the file was moved"


# Notes errors (40-49)
class NotInEditingContext(BinderyError):
    """A notes action was invoked without an open notes session."""

    exit_code = 40

