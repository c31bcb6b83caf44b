# routers/auth.py
"""
Authentication and account API routes.

Registration always creates a tenant account; staff and admin accounts
are created by the super admin.
Credential routes share the AUTH_RATE_LIMIT budget per client address.
"""
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

import config
from database import get_session
from dependencies import get_current_user
from models import User
from rate_limiter import auth_rate_limit
from schemas.auth import (
     AuthResponse,
     ChangePasswordRequest,
     ForgotPasswordRequest,
     ForgotPasswordResponse,
     LoginRequest,
     ProfileResponse,
     ProfileUpdate,
     RegisterRequest,
     ResetPasswordRequest,
     SettingsResponse,
     SettingsUpdate,
     UserResponse,
)
from schemas.common import MessageResponse, UrlResponse
from security import create_access_token
from services.auth_service import AuthService
from utils import storage

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
     return AuthResponse(
          **UserResponse.model_validate(user).model_dump(),
          token=create_access_token(user.id),
          requires_onboarding=AuthService.requires_onboarding(user),
     )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Sign up")
@auth_rate_limit
def register(request: Request, body: RegisterRequest, db: Session = Depends(get_session)):
     """
     Create a tenant account. An organizational code binds the account to
     the hostel it belongs to.
     """
     user = AuthService.register(db, body)
     db.commit()
     return _auth_response(user)


@router.post("/login", response_model=AuthResponse, summary="Sign in")
@auth_rate_limit
def login(request: Request, body: LoginRequest, db: Session = Depends(get_session)):
     user = AuthService.authenticate(db, body.email, body.password)
     return _auth_response(user)


@router.get("/profile", response_model=ProfileResponse, summary="Current user's profile")
def get_profile(user: User = Depends(get_current_user)):
     return ProfileResponse.model_validate(user)


@router.put("/profile", response_model=ProfileResponse, summary="Update profile")
def update_profile(
     body: ProfileUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     user = AuthService.update_profile(db, user, body)
     db.commit()
     return ProfileResponse.model_validate(user)


@router.put("/profile/image", response_model=UrlResponse, summary="Upload profile image")
def upload_profile_image(
     file: UploadFile = File(...),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     previous = user.profile_image
     user.profile_image = storage.store_upload(file, "profiles")
     db.commit()
     storage.remove_upload(previous)
     return UrlResponse(url=user.profile_image, message="Profile image uploaded successfully")


@router.put("/settings", response_model=SettingsResponse, summary="Update notification settings")
def update_settings(
     body: SettingsUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     settings = AuthService.update_settings(db, user, body.notifications)
     db.commit()
     return SettingsResponse(message="Settings updated successfully", settings=settings)


@router.put("/change-password", response_model=MessageResponse, summary="Change password")
@auth_rate_limit
def change_password(
     request: Request,
     body: ChangePasswordRequest,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     AuthService.change_password(db, user, body.current_password, body.new_password)
     db.commit()
     return MessageResponse(message="Password changed successfully")


@router.post("/forgot-password", response_model=ForgotPasswordResponse, summary="Request a password reset")
@auth_rate_limit
def forgot_password(request: Request, body: ForgotPasswordRequest, db: Session = Depends(get_session)):
     """
     Emails a reset link valid for 30 minutes. The link itself is only
     echoed back when RESET_URL_IN_RESPONSE is enabled (development).
     """
     _, reset_url = AuthService.forgot_password(db, body.email)
     db.commit()
     return ForgotPasswordResponse(
          message="Password reset link has been generated. Check your email.",
          reset_url=reset_url if config.RESET_URL_IN_RESPONSE else None,
     )


@router.post("/reset-password", response_model=MessageResponse, summary="Reset password with token")
@auth_rate_limit
def reset_password(request: Request, body: ResetPasswordRequest, db: Session = Depends(get_session)):
     AuthService.reset_password(db, body.token, body.password)
     db.commit()
     return MessageResponse(message="Password reset successful. You can now login with your new password.")
