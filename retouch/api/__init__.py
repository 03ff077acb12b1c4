"""
API Module - Editor front-end interface.

Exposes the engine via REST API. The front-end:
1. Logs in and keeps the session token
2. Saves an API key for the image backend
3. Loads a primary image and optionally a reference image
4. Generates, undoes, redoes and downloads results
5. (Admins) manages member accounts
"""

from .schemas import (
    # Requests
    LoginRequest,
    AddAccountRequest,
    ChangePasswordRequest,
    ApiKeyRequest,
    GenerateRequest,
    # Responses
    LoginResponse,
    LogoutResponse,
    SessionCheckResponse,
    AccountListResponse,
    AccessSummaryResponse,
    WorkspaceResponse,
    ErrorResponse,
    # Shared
    AccountInfo,
    VersionInfo,
    ReferenceInfo,
)
from .service import APIService
from .app import create_app, build_service

__all__ = [
    # Requests
    "LoginRequest",
    "AddAccountRequest",
    "ChangePasswordRequest",
    "ApiKeyRequest",
    "GenerateRequest",
    # Responses
    "LoginResponse",
    "LogoutResponse",
    "SessionCheckResponse",
    "AccountListResponse",
    "AccessSummaryResponse",
    "WorkspaceResponse",
    "ErrorResponse",
    # Shared
    "AccountInfo",
    "VersionInfo",
    "ReferenceInfo",
    # Service
    "APIService",
    "create_app",
    "build_service",
]
