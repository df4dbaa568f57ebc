"""
Utilidades de seguridad: secreto de cron, sesion de organizacion y firma
de webhooks.
"""
import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Optional

from portlink.shared.exceptions.auth import (
    NotAuthenticatedException,
    SessionExpiredException,
)


@dataclass(frozen=True)
class OrgSession:
    """Contexto de la organizacion autenticada (un request)."""

    organization_id: str
    expires_at: int
    organization_name: Optional[str] = None
    email: Optional[str] = None


class SecurityService:
    """Servicio para operaciones de seguridad."""

    @staticmethod
    def verify_cron_secret(authorization: Optional[str], cron_secret: str) -> bool:
        """
        Verifica el header Authorization de los endpoints de cron.

        Args:
            authorization: Valor del header ("Bearer <secreto>")
            cron_secret: Secreto configurado; vacio deja el endpoint abierto

        Returns:
            bool: True si el request esta autorizado
        """
        if not cron_secret:
            return True
        expected = f"Bearer {cron_secret}"
        return hmac.compare_digest((authorization or "").encode(), expected.encode())

    @staticmethod
    def parse_org_session(cookie_value: Optional[str], now_ms: int) -> OrgSession:
        """
        Decodifica la cookie de sesion de organizacion.

        La cookie es un JSON: {organization_id, organization_name?, email?,
        expires_at} con expires_at en milisegundos desde epoch.

        Raises:
            NotAuthenticatedException: cookie ausente o malformada
            SessionExpiredException: expires_at ya paso
        """
        if not cookie_value:
            raise NotAuthenticatedException()
        try:
            data = json.loads(cookie_value)
        except ValueError:
            raise NotAuthenticatedException()
        if not isinstance(data, dict) or not data.get("organization_id"):
            raise NotAuthenticatedException()

        try:
            expires_at = int(data.get("expires_at"))
        except (TypeError, ValueError):
            raise NotAuthenticatedException()
        if expires_at < now_ms:
            raise SessionExpiredException()

        return OrgSession(
            organization_id=str(data["organization_id"]),
            expires_at=expires_at,
            organization_name=data.get("organization_name"),
            email=data.get("email"),
        )

    @staticmethod
    def sign_payload(body: bytes, secret: str) -> str:
        """HMAC-SHA256 en hexadecimal del cuerpo crudo."""
        return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()

    @staticmethod
    def verify_webhook_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
        """Compara la firma recibida con la esperada en tiempo constante."""
        if not signature:
            return False
        expected = SecurityService.sign_payload(body, secret)
        return hmac.compare_digest(signature.strip().lower().encode(), expected.encode())
