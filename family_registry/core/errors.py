class RegistryError(Exception):
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(RegistryError):
    status_code = 404


class AlreadyProcessed(RegistryError):
    status_code = 409


class AlreadyApproved(AlreadyProcessed):
    pass


class ValidationError(RegistryError):
    status_code = 422


class ConflictError(RegistryError):
    status_code = 409


class TransientFailure(RegistryError):
    status_code = 503


class DependencyError(RegistryError):
    status_code = 503


class AuthenticationError(RegistryError):
    status_code = 401


class AccountLocked(AuthenticationError):
    status_code = 423
