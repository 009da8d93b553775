"""
Registry Exceptions
Error taxonomy raised by the access control and product registry services
"""


class RegistryError(Exception):
    """Base class for every rejected registry call"""

    status_code = 400
    error = 'Registry error'

    def __init__(self, message: str = None):
        self.message = message or self.error
        super().__init__(self.message)


class Unauthorized(RegistryError):
    """Caller lacks the role or ownership the operation requires"""
    status_code = 403
    error = 'Unauthorized'


class NotFound(RegistryError):
    """Referenced product id is outside the assigned range"""
    status_code = 404
    error = 'Not found'


class InvalidArgument(RegistryError):
    """Empty required text, or a null identity where a real one is required"""
    status_code = 400
    error = 'Invalid argument'


class AlreadyVerified(RegistryError):
    status_code = 409
    error = 'Already verified'


class AlreadyInitialized(RegistryError):
    status_code = 409
    error = 'Already initialized'


class ConcurrentModification(RegistryError):
    """A stored record changed between read and write (cross-process race)"""
    status_code = 409
    error = 'Concurrent modification'


class AuthError(Exception):
    """Missing or invalid bearer token"""
    pass
