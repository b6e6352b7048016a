"""
Pydantic models for the voice command interpreter.

Defines intent kinds, action types and the result contract returned to
callers (UI dispatch, analytics, REST/MCP mirroring).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


NOT_RECOGNIZED_MESSAGE = "Command not recognized."
NO_COMMAND_MESSAGE = "No command provided."
HANDLER_FAILED_MESSAGE = "Sorry, that command could not be completed."


class IntentKind(str, Enum):
    """Variant tag carried by every intent definition."""

    NAVIGATE = "navigate"
    SEARCH = "search"
    READ = "read"
    CUSTOM = "custom"


class ActionType(str, Enum):
    """Client-side action the caller should perform."""

    NAVIGATE = "navigate"
    SEARCH = "search"
    READ = "read"
    NONE = "none"


# Actions that must carry a url
URL_ACTIONS = frozenset({ActionType.NAVIGATE, ActionType.SEARCH})


class CommandRequest(BaseModel):
    """A raw utterance as received from the speech-to-text actor."""

    text: str = ""


class ActionResult(BaseModel):
    """Result of processing a command.

    Handlers return these (or a plain dict with the same keys), and the
    command processor returns one for every call. Defaults describe the
    not-recognized failure so a partial handler result merges cleanly.
    """

    success: bool = False
    action: ActionType = ActionType.NONE
    url: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    message: str = Field(default=NOT_RECOGNIZED_MESSAGE, min_length=1)

    @model_validator(mode="after")
    def _check_action_fields(self) -> "ActionResult":
        has_url = self.url is not None
        if has_url != (self.action in URL_ACTIONS):
            raise ValueError(f"url must be set exactly when action is navigate or search (action={self.action.value})")

        is_read = self.action == ActionType.READ
        if is_read and (self.title is None or self.content is None):
            raise ValueError("read results need both title and content")
        if not is_read and (self.title is not None or self.content is not None):
            raise ValueError(f"title/content are only allowed on read results (action={self.action.value})")
        return self

    @classmethod
    def failure(cls, message: str) -> "ActionResult":
        return cls(success=False, action=ActionType.NONE, message=message)


class SpeechContent(BaseModel):
    """Title/content pair delivered to smart-speaker style integrations."""

    title: str
    content: str
