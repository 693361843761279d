# app/models/landing.py
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class ContactSource(str, Enum):
    MODAL = "modal"
    SUBSCRIPTION_FORM = "subscription_form"

class ConversionEventType(str, Enum):
    MODAL_FORM_SUBMIT = "modal_form_submit"
    EMAIL_SUBSCRIPTION = "email_subscription"

# Required fields are optional here so a missing one is answered with the
# landing envelope and a 400 instead of FastAPI's default 422.
class ContactRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    cta_type: Optional[str] = Field(None, alias="ctaType")
    timestamp: Optional[Union[int, float, str]] = None

class SubscribeRequest(BaseModel):
    email: Optional[str] = None

class TrackClickRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    button_type: Optional[str] = Field(None, alias="buttonType")
    email: Optional[str] = None
    session_id: Optional[str] = Field(None, alias="sessionId")

class LandingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    contact_id: Optional[str] = Field(None, alias="contactId")

    def to_content(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
