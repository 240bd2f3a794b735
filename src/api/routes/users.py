"""Current-user routes.

- GET /users/me: profile of the authenticated user
- PUT /users/me/simulate-score-update: apply a simulated credit score change
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service
from api.models import ErrorResponse, ScoreUpdateResponse, UserResponse
from api.security import get_current_user_required
from domain.model.user import PublicUser
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: PublicUser = Depends(get_current_user_required),
    user_service: UserService = Depends(get_user_service),
):
    """Profile of the authenticated user, read fresh from the store."""
    return UserResponse.model_validate(user_service.get_profile(current_user.id))


@router.put("/me/simulate-score-update", response_model=ScoreUpdateResponse)
def simulate_score_update(
    current_user: PublicUser = Depends(get_current_user_required),
    user_service: UserService = Depends(get_user_service),
):
    """Simulate a credit score change for the current user.

    Raises:
        401 if not authenticated, 404 if the user disappeared meanwhile
    """
    user = user_service.simulate_score_update(current_user.id)
    return ScoreUpdateResponse(
        message="Simulated score updated successfully.",
        user=UserResponse.model_validate(user),
    )
