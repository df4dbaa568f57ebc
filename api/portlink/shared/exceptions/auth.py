"""
Excepciones relacionadas con autenticación y autorización.
"""
from portlink.shared.exceptions.base import AppException


class AuthException(AppException):
    """Excepción base para errores de autenticación."""

    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details
        )


class UnauthorizedException(AuthException):
    """Excepción para acceso no autorizado (secreto de cron ausente o inválido)."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            error_code="UNAUTHORIZED"
        )


class NotAuthenticatedException(AuthException):
    """Excepción cuando no hay sesión de organización."""

    def __init__(self):
        super().__init__(
            message="Not authenticated",
            error_code="NOT_AUTHENTICATED"
        )


class SessionExpiredException(AuthException):
    """Excepción para sesión de organización expirada."""

    def __init__(self):
        super().__init__(
            message="Session expired",
            error_code="SESSION_EXPIRED"
        )


class InvalidSignatureException(AuthException):
    """Excepción para firmas de webhook inválidas."""

    def __init__(self):
        super().__init__(
            message="Invalid signature",
            error_code="INVALID_SIGNATURE"
        )


class ForbiddenException(AppException):
    """Excepción cuando la organización no tiene permiso para la operación."""

    def __init__(self, message: str, details=None):
        super().__init__(
            message=message,
            status_code=403,
            error_code="FORBIDDEN",
            details=details
        )
