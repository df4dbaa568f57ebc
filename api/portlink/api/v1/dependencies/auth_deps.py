"""
Dependencias de autenticacion: secreto de cron y sesion de organizacion.

Los handlers reciben el contexto ya resuelto; nada se lee de variables
globales dentro del request.
"""
from typing import Optional

from fastapi import Depends, Header, Request

from portlink.core.config import Settings, get_settings
from portlink.core.security import OrgSession, SecurityService
from portlink.shared.exceptions.auth import UnauthorizedException
from portlink.shared.utils.datetime_utils import DateTimeUtils


async def require_cron_secret(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Exige `Authorization: Bearer <CRON_SECRET>` cuando el secreto esta configurado.

    Raises:
        UnauthorizedException: si el header no coincide
    """
    if not SecurityService.verify_cron_secret(authorization, settings.CRON_SECRET):
        raise UnauthorizedException()


async def get_org_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> OrgSession:
    """
    Resuelve la organizacion autenticada desde la cookie de sesion.

    Raises:
        NotAuthenticatedException: cookie ausente o malformada
        SessionExpiredException: sesion vencida
    """
    cookie = request.cookies.get(settings.ORG_SESSION_COOKIE)
    return SecurityService.parse_org_session(cookie, DateTimeUtils.now_epoch_ms())
