"""
Pydantic models for Momentum API request/response types.

These models define the data structures for all API endpoints,
providing validation, serialization, and documentation.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# =============================================================================
# Common Models
# =============================================================================


class HealthCheck(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Overall system status")
    version: str = Field(default="0.1.0", description="API version")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    services: dict[str, str] = Field(
        default_factory=dict, description="Individual service statuses"
    )


class ErrorResponse(BaseModel):
    """Consistent error body for every failed request."""

    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")


# =============================================================================
# Auth Models
# =============================================================================


class LoginRequest(BaseModel):
    """Identity asserted by the front end's sign-in flow."""

    login_key: str | None = Field(None, description="Shared secret (MOMENTUM_LOGIN_KEY)")
    user_id: str = Field(..., min_length=1, description="Stable user identifier")
    display_name: str | None = Field(None, description="Name shown in the header")
    photo_url: str | None = Field(None, description="Avatar URL")


class LoginResponse(BaseModel):
    token: str = Field(..., description="Session token (also set as a cookie)")
    user_id: str
    display_name: str | None = None
    greeting_name: str = Field(..., description="First name for 'Hello, ...!'")
    expires_at: str


class CurrentUser(BaseModel):
    user_id: str
    display_name: str | None = None
    photo_url: str | None = None
    greeting_name: str = "there"


# =============================================================================
# Void Models
# =============================================================================


class NextActionInput(BaseModel):
    """The next action typed in the last step of the 'I'm stuck' flow."""

    description: str = Field("", description="Smallest next physical action")
    estimated_minutes: int | None = Field(None, gt=0, description="Time estimate in minutes")


class VoidCreate(BaseModel):
    title: str = Field(..., description="What are you avoiding?")
    description: str | None = Field(None, description="What makes it hard?")
    next_action: NextActionInput | None = None


class NextAction(BaseModel):
    id: str
    user_id: str
    void_id: str | None = None
    void_title: str | None = None
    description: str
    estimated_minutes: int | None = None
    completed: bool = False
    created_at: str
    completed_at: str | None = None


class VoidEntry(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    created_at: str
    next_actions: list[NextAction] | None = None


class VoidCreated(BaseModel):
    void_id: str
    void: VoidEntry
    next_action: NextAction | None = None


class VoidListResponse(BaseModel):
    voids: list[VoidEntry] = Field(default_factory=list)
    total: int = 0
    limit: int = 50
    offset: int = 0


# =============================================================================
# Next Action Models
# =============================================================================


class NextActionCreate(BaseModel):
    description: str = Field(..., description="Next action description")
    estimated_minutes: int | None = Field(None, gt=0)
    void_id: str | None = None


class BoardSummary(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0


class TodayResponse(BaseModel):
    """Today's next actions: unfinished ones plus anything finished today."""

    actions: list[NextAction] = Field(default_factory=list)
    summary: BoardSummary = Field(default_factory=BoardSummary)
    day_start: str


class ToggleResponse(BaseModel):
    completed: bool
    action: NextAction | None = None


# =============================================================================
# AI Models
# =============================================================================


class SuggestionRequest(BaseModel):
    prompt: str | None = Field(None, description="Prompt asking for a JSON array")


class NextActionSuggestionRequest(BaseModel):
    title: str = Field(..., description="What you're avoiding")
    description: str | None = None


class SuggestionResponse(BaseModel):
    suggestions: list = Field(default_factory=list)
