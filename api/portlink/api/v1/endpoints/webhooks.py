"""
Webhooks de Mawani y de las APIs de organizaciones.

Con MAWANI_WEBHOOK_SECRET configurado se exige `x-mawani-signature`:
HMAC-SHA256 hexadecimal del cuerpo crudo.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from portlink.api.v1.dependencies.use_case_deps import get_org_webhook_use_cases, get_webhook_use_cases
from portlink.application.dto.webhook_dto import MawaniWebhookDTO, OrganizationWebhookDTO
from portlink.application.use_cases.webhook_use_cases import (
    MawaniWebhookUseCases,
    OrganizationWebhookUseCases,
)
from portlink.core.config import Settings, get_settings
from portlink.core.security import SecurityService
from portlink.shared.exceptions.auth import InvalidSignatureException

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/mawani")
async def mawani_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    use_cases: MawaniWebhookUseCases = Depends(get_webhook_use_cases),
):
    body = await request.body()
    secret = settings.MAWANI_WEBHOOK_SECRET
    if secret and not SecurityService.verify_webhook_signature(
        body, request.headers.get("x-mawani-signature"), secret
    ):
        raise InvalidSignatureException()

    try:
        payload = MawaniWebhookDTO.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    result = await use_cases.handle(payload)
    return {"success": True, **result}


@router.post("/organization/{organization_id}")
async def organization_webhook(
    organization_id: str,
    request: Request,
    use_cases: OrganizationWebhookUseCases = Depends(get_org_webhook_use_cases),
):
    """
    Eventos VESSEL_ADDED, SHIPMENT_UPDATED y VESSEL_CANCELLED de la API de
    una organizacion. Si la integracion tiene webhook_secret se exige
    `x-organization-signature`.
    """
    body = await request.body()
    integration = await use_cases.authenticate(
        organization_id, body, request.headers.get("x-organization-signature")
    )

    try:
        payload = OrganizationWebhookDTO.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    result = await use_cases.handle(organization_id, payload, integration)
    return {"success": True, **result}
