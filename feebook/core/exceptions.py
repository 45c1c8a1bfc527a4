"""Domain exceptions raised by the ledger services"""


class FeebookError(Exception):
    """Base class for rejections surfaced to the user"""

    code = "FEEBOOK_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeebookError):
    """Input rejected before any write happened"""

    code = "VALIDATION_ERROR"


class NotFoundError(FeebookError):
    """A referenced record does not resolve"""

    code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} {identifier} does not exist.")
        self.resource = resource
        self.identifier = identifier


class ConflictError(FeebookError):
    """Another writer changed the collection after this request read it"""

    code = "WRITE_CONFLICT"

    def __init__(self, collection: str):
        super().__init__(f"{collection} changed while saving. Reload and try again.")
        self.collection = collection
