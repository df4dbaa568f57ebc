"""
Raiz de la jerarquia de errores de la API.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Error con status HTTP propio.

    El handler registrado en main lo serializa como
    {"success": false, "error": message, "code": ..., "details": ...}.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "code": self.error_code,
            "details": self.details,
        }
