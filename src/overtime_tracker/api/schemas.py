"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class DayEntryPayload(BaseModel):
    """Day entry as sent by the client."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    start_time: str = Field(alias="startTime", pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(alias="endTime", pattern=r"^\d{2}:\d{2}$")
    project_worked: str = Field(default="", alias="projectWorked")
    calculation_model_id: str = Field(default="", alias="calculationModelId")


class SaveHoursPayload(BaseModel):
    """Full replacement of a month's salary and entries."""

    salary: float = Field(ge=0)
    days: list[DayEntryPayload]


class ModelPayload(BaseModel):
    """Fields accepted when creating or editing a calculation model."""

    name: str | None = None
    multiplier: float | None = None


class RegisterPayload(BaseModel):
    """Payload for creating an account."""

    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginPayload(BaseModel):
    """Payload for signing in."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=1)
    device_name: str | None = Field(
        default=None, alias="deviceName", min_length=1, max_length=100
    )


class RefreshPayload(BaseModel):
    """Payload carrying a refresh token."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(alias="refreshToken", min_length=1)
