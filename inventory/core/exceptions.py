"""Domain exceptions. Raised by services, rendered by the error middleware."""


class AppError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    default_message = "The request is invalid."


class ValidationFailedError(BadRequestError):
    default_message = "One or more validation errors occurred."

    def __init__(self, failures: list, message: str | None = None):
        self.failures = list(failures)
        super().__init__(message)


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Authentication is required."


class ForbiddenError(AppError):
    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFoundError(AppError):
    status_code = 404
    default_message = "The requested resource was not found."


class ConflictError(AppError):
    status_code = 409
    default_message = "The resource already exists."


class ConcurrencyError(ConflictError):
    default_message = "The resource was modified by another user. Please refresh and try again."


class MappingError(AppError):
    default_message = "An error occurred while processing the data."


class IntegrationError(AppError):
    default_message = "Failed to communicate with Microsoft Intune."


class RateLimitExceededError(AppError):
    status_code = 429

    def __init__(self, policy: str, retry_after_seconds: int):
        self.policy = policy
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Too many requests. Please retry after {retry_after_seconds} seconds.")
