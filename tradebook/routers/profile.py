# FILE: tradebook/routers/profile.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from tradebook.config import Settings
from tradebook.database import get_db
from tradebook.dependencies import get_current_user_id, get_session_service, get_settings
from tradebook.routers.auth import clear_refresh_cookie
from tradebook.schemas.profile import ChangePasswordRequest, ProfileRead, ProfileUpdate
from tradebook.services import profile as profile_service
from tradebook.services.auth import SessionService

router = APIRouter(tags=["profile"])


@router.get("", response_model=ProfileRead)
def get_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """
    The caller's user record plus investment profile, if one was saved.
    """
    return profile_service.get_profile(user_id, db)


@router.put("", response_model=ProfileRead)
def update_profile(
    profile: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Partially update name/username and replace the investment profile.
    409 if the new username is taken.
    """
    return profile_service.update_profile(user_id, profile, db)


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    body: ChangePasswordRequest,
    user_id: str = Depends(get_current_user_id),
    sessions: SessionService = Depends(get_session_service),
):
    """
    Change the password after re-checking the current one (401 if wrong).
    """
    sessions.change_password(user_id, body.current_password, body.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Delete the caller, their accounts and trades, then clear the refresh
    cookie. Returns 204 No Content.
    """
    profile_service.delete_profile(user_id, db)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_refresh_cookie(response, settings)
    return response
