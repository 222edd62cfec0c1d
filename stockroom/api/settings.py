"""User settings API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_current_user
from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.schemas.settings import (
    NotificationToggles,
    ProfileSettings,
    UserSettingsResponse,
    UserSettingsUpdate,
)

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])

PROFILE_FIELDS = {"full_name": "name", "phone": "phone", "avatar": "avatar"}


def build_settings_response(user: User) -> UserSettingsResponse:
    """Render a user's profile and notification preferences."""
    return UserSettingsResponse(
        profile=ProfileSettings(
            full_name=user.name or "",
            email=user.email or "",
            phone=user.phone or "",
            role=user.role or "user",
            avatar=user.avatar,
        ),
        notifications=notification_toggles(user),
    )


def notification_toggles(user: User) -> NotificationToggles:
    """A user's notification preferences with defaults for unset values."""
    defaults = NotificationToggles()
    return NotificationToggles(
        order_alerts=defaults.order_alerts if user.order_alerts is None else user.order_alerts,
        low_stock_warnings=(
            defaults.low_stock_warnings
            if user.low_stock_warnings is None
            else user.low_stock_warnings
        ),
        weekly_reports=(
            defaults.weekly_reports if user.weekly_reports is None else user.weekly_reports
        ),
    )


@router.get("", response_model=UserSettingsResponse)
def get_user_settings(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the current user's settings."""
    return build_settings_response(current_user)


@router.patch("", response_model=UserSettingsResponse)
def update_user_settings(
    settings_update: UserSettingsUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update profile fields and notification preferences that are provided."""
    if settings_update.profile:
        profile = settings_update.profile.model_dump(exclude_unset=True)
        for field, value in profile.items():
            setattr(current_user, PROFILE_FIELDS[field], value)

    if settings_update.notifications:
        toggles = settings_update.notifications.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in toggles.items():
            setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return build_settings_response(current_user)
