from pydantic import BaseModel
from typing import Optional
import enum

class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"

class Notification(BaseModel):
    """User-visible message returned alongside an action's result."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

class ActionResponse(BaseModel):
    notification: Notification
    redirect_to: Optional[str] = None
