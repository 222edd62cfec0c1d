"""User settings schemas."""

from pydantic import BaseModel, Field


class ProfileSettings(BaseModel):
    """Profile section of the user settings."""

    full_name: str
    email: str
    phone: str
    role: str
    avatar: str | None = None


class NotificationToggles(BaseModel):
    """Dashboard notification preferences."""

    order_alerts: bool = True
    low_stock_warnings: bool = True
    weekly_reports: bool = False


class UserSettingsResponse(BaseModel):
    """Full settings payload."""

    profile: ProfileSettings
    notifications: NotificationToggles


class ProfileUpdate(BaseModel):
    """Editable profile fields."""

    full_name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=30)
    avatar: str | None = Field(None, max_length=500)


class NotificationTogglesUpdate(BaseModel):
    """Editable notification preferences."""

    order_alerts: bool | None = None
    low_stock_warnings: bool | None = None
    weekly_reports: bool | None = None


class UserSettingsUpdate(BaseModel):
    """Partial settings update."""

    profile: ProfileUpdate | None = None
    notifications: NotificationTogglesUpdate | None = None
