"""Credit card offer routes.

- GET /offers: full catalog, sorted by issuer then card name
- GET /offers/recommended: offers matching the current user's credit score
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_offer_service
from api.models import ErrorResponse, OfferResponse
from api.security import get_current_user_required
from domain.model.user import PublicUser
from services.offer_service import OfferService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/offers",
    tags=["offers"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("", response_model=list[OfferResponse])
def list_offers(offer_service: OfferService = Depends(get_offer_service)):
    offers = offer_service.list_offers()
    return [OfferResponse.model_validate(offer) for offer in offers]


@router.get("/recommended", response_model=list[OfferResponse])
def recommended_offers(
    current_user: PublicUser = Depends(get_current_user_required),
    offer_service: OfferService = Depends(get_offer_service),
):
    """Offers whose score window contains the current user's credit score."""
    offers = offer_service.recommended_offers(current_user.credit_score)

    logger.info("Recommended offers retrieved", extra={
        "userId": current_user.id,
        "creditScore": current_user.credit_score,
        "count": len(offers),
    })
    return [OfferResponse.model_validate(offer) for offer in offers]
