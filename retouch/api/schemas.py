"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the editor front-end and the
engine. Images travel as multipart uploads on the way in and as raw bytes
on the way out; the JSON models only carry metadata.

Error codes are listed in retouch.errors.ErrorCode.
"""

from datetime import datetime
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..errors import ErrorCode
from ..accounts.models import Role


# =============================================================================
# Shared Models
# =============================================================================

class AccountInfo(BaseModel):
    """Account as shown to admins and to its owner. Never carries secrets."""
    id: str
    username: str
    role: Role
    is_active: bool
    expiry_date: Optional[datetime] = None
    has_api_key: bool = False
    has_session: bool = False


class VersionInfo(BaseModel):
    """One entry of the edit history."""
    version_id: str
    media_type: str
    created_at: float
    size_bytes: int


class ReferenceInfo(BaseModel):
    media_type: str
    size_bytes: int


# =============================================================================
# Request Models
# =============================================================================

class LoginRequest(BaseModel):
    username: str
    password: str


class AddAccountRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    expiry_date: Optional[datetime] = Field(None, description="Omit for a lifetime account")


class ChangePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=1)


class ApiKeyRequest(BaseModel):
    api_key: str = Field(..., min_length=1)


class GenerateRequest(BaseModel):
    prompt: str = Field("", description="Main prompt")
    refine_prompt: str = Field("", description="Used instead of prompt once an edit exists")
    preset: Optional[str] = Field(None, description="Scene preset key whose text replaces the main prompt")
    style: Optional[str] = Field(None, description="Image style key appended to the main prompt")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class LoginResponse(BaseModel):
    """Successful login. The token must accompany every later request."""
    session_token: str
    account: AccountInfo
    requires_api_key: bool = Field(..., description="True if no API key is saved yet")


class SessionCheckResponse(BaseModel):
    username: str
    valid: bool


class LogoutResponse(BaseModel):
    success: bool
    username: str


class AccountListResponse(BaseModel):
    accounts: list[AccountInfo]
    count: int


class AccessSummaryResponse(BaseModel):
    username: str
    text: str


class WorkspaceResponse(BaseModel):
    """Current editing state."""
    username: str
    cursor: int = Field(..., description="-1 when no image is loaded")
    versions: list[VersionInfo] = Field(default_factory=list)
    current_version_id: Optional[str] = None
    can_undo: bool = False
    can_redo: bool = False
    reference: Optional[ReferenceInfo] = None
    busy: bool = False


class PresetInfo(BaseModel):
    key: str
    label: str
    prompt: str


class StyleListResponse(BaseModel):
    styles: dict[str, str]
    presets: list[PresetInfo] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
