# backend/clinic/core/errors.py


class ClinicError(Exception):
    """Base class for errors the HTTP layer maps to a response."""

    status_code = 500
    error_code = "clinic_error"


class ConsultationValidationError(ClinicError):
    status_code = 400
    error_code = "validation_error"

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation Error: {message}")


class NotFoundError(ClinicError):
    status_code = 404
    error_code = "not_found"


class DuplicateEmailError(ClinicError):
    status_code = 409
    error_code = "duplicate_email"


class InvalidStatusTransitionError(ClinicError):
    status_code = 409
    error_code = "invalid_status_transition"


class FeatureDisabledError(ClinicError):
    status_code = 503
    error_code = "feature_disabled"
