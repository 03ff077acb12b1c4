"""
FastAPI Application - REST API for the image editor front-end.

Endpoints:
    POST   /api/v1/auth/login                       Log in, receive a session token
    POST   /api/v1/auth/logout                      Forget the client session
    GET    /api/v1/auth/session                     Check a session token
    PUT    /api/v1/auth/api-key                     Save the caller's API key
    GET    /api/v1/admin/accounts                   List accounts
    POST   /api/v1/admin/accounts                   Add a member
    PUT    /api/v1/admin/accounts/{username}/password   Reset a member password
    POST   /api/v1/admin/accounts/{account_id}/toggle   Ban / unban a member
    GET    /api/v1/admin/accounts/{username}/share  Shareable access text
    GET    /api/v1/workspace                        Editing state
    DELETE /api/v1/workspace                        New project
    PUT    /api/v1/workspace/image                  Load a new primary image
    GET    /api/v1/workspace/image                  Download the current image
    POST   /api/v1/workspace/undo | redo | origin   Move the history cursor
    PUT    /api/v1/workspace/reference              Set the reference image
    DELETE /api/v1/workspace/reference              Clear the reference image
    POST   /api/v1/workspace/generate               Run one AI edit
    POST   /api/v1/workspace/upscale                Upscale the current image to 4K
    GET    /api/v1/styles                           Available image styles and scene presets

Identity travels in the X-Username and X-Session-Token headers.
Every failure is returned as an ErrorResponse with a machine-readable code.
"""

from typing import Annotated, Optional
import os

from fastapi import FastAPI, File, Header, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..accounts import InMemoryAccountStore, JsonFileAccountStore
from ..editing import EditOrchestrator, IMAGE_STYLES, PROMPT_PRESETS, gemini_transform_factory
from ..errors import ErrorCode, RetouchError
from .service import APIService
from .schemas import (
    # Request models
    LoginRequest,
    AddAccountRequest,
    ChangePasswordRequest,
    ApiKeyRequest,
    GenerateRequest,
    # Response models
    LoginResponse,
    LogoutResponse,
    SessionCheckResponse,
    AccountInfo,
    AccountListResponse,
    AccessSummaryResponse,
    WorkspaceResponse,
    StyleListResponse,
    PresetInfo,
    ErrorResponse,
    HealthResponse,
)

# Environment configuration
RETOUCH_ENV = os.getenv("RETOUCH_ENV", "development")
RETOUCH_DATA_FILE = os.getenv("RETOUCH_DATA_FILE", None)
RETOUCH_IMAGE_MODEL = os.getenv("RETOUCH_IMAGE_MODEL", "gemini-3-pro-image-preview")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

UsernameHeader = Annotated[str, Header(alias="X-Username", description="Logged-in username")]
TokenHeader = Annotated[
    Optional[str],
    Header(alias="X-Session-Token", description="Token returned by login"),
]


def build_service(data_file: str | None = None, image_model: str = RETOUCH_IMAGE_MODEL) -> APIService:
    """Wire an APIService from configuration."""
    store = JsonFileAccountStore(data_file) if data_file else InMemoryAccountStore()
    return APIService(
        store=store,
        orchestrator=EditOrchestrator(gemini_transform_factory(model=image_model)),
    )


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from env if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Retouch Engine API",
        description="""
Iterative AI image editing with a navigable history.

## Session rules

- `POST /auth/login` returns a token; send it as `X-Session-Token`
  together with `X-Username` on every other call.
- A new login invalidates the previous token.
- A password reset or ban by an admin invalidates the token immediately.
- Any call answered with `SESSION_INVALID` has dropped the local
  editing state; log in again.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_CREDENTIALS` | Unknown username or wrong password |
| `ACCOUNT_INACTIVE` | Account is banned |
| `ACCOUNT_EXPIRED` | Account validity has ended |
| `SESSION_INVALID` | Session expired or invalid |
| `MISSING_INPUT` | No prompt and no reference image |
| `MISSING_ACCESS_CREDENTIAL` | No API key saved |
| `TRANSFORM_FAILED` | The image backend failed; state unchanged |
        """,
        version=__version__,
        docs_url=None if RETOUCH_ENV == "production" else "/api/docs",
        redoc_url=None if RETOUCH_ENV == "production" else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or build_service(RETOUCH_DATA_FILE)
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RetouchError)
    async def handle_retouch_error(request: Request, exc: RetouchError) -> JSONResponse:
        return make_error_response(exc.code, exc.message, exc.status_code, exc.details)

    error_responses = {
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse, "description": "Session invalid"},
        403: {"model": ErrorResponse},
    }

    async def read_upload(upload: UploadFile) -> tuple[bytes, str]:
        data = await upload.read()
        return data, upload.content_type or "application/octet-stream"

    # =========================================================================
    # Auth Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/auth/login",
        response_model=LoginResponse,
        responses=error_responses,
        tags=["Auth"],
        summary="Log in",
    )
    async def login(request: LoginRequest) -> LoginResponse:
        return api_service.login(request)

    @app.post(
        "/api/v1/auth/logout",
        response_model=LogoutResponse,
        tags=["Auth"],
        summary="Forget the client session",
    )
    async def logout(username: UsernameHeader, token: TokenHeader = None) -> LogoutResponse:
        return api_service.logout(username, token)

    @app.get(
        "/api/v1/auth/session",
        response_model=SessionCheckResponse,
        tags=["Auth"],
        summary="Check whether a session token is still valid",
    )
    async def check_session(username: UsernameHeader, token: TokenHeader = None) -> SessionCheckResponse:
        return api_service.validate_session(username, token)

    @app.put(
        "/api/v1/auth/api-key",
        response_model=AccountInfo,
        responses=error_responses,
        tags=["Auth"],
        summary="Save the caller's API key",
    )
    async def save_api_key(
        request: ApiKeyRequest,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> AccountInfo:
        return api_service.save_api_key(username, token, request)

    # =========================================================================
    # Admin Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/admin/accounts",
        response_model=AccountListResponse,
        responses=error_responses,
        tags=["Admin"],
        summary="List accounts in insertion order",
    )
    async def list_accounts(username: UsernameHeader, token: TokenHeader = None) -> AccountListResponse:
        return api_service.list_accounts(username, token)

    @app.post(
        "/api/v1/admin/accounts",
        response_model=AccountInfo,
        responses={**error_responses, 409: {"model": ErrorResponse, "description": "User exists"}},
        tags=["Admin"],
        summary="Add a member account",
    )
    async def add_account(
        request: AddAccountRequest,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> AccountInfo:
        return api_service.add_account(username, token, request)

    @app.put(
        "/api/v1/admin/accounts/{target_username}/password",
        response_model=AccountInfo,
        responses={**error_responses, 404: {"model": ErrorResponse}},
        tags=["Admin"],
        summary="Reset a member's password and end their session",
    )
    async def change_password(
        target_username: str,
        request: ChangePasswordRequest,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> AccountInfo:
        return api_service.change_password(username, token, target_username, request)

    @app.post(
        "/api/v1/admin/accounts/{account_id}/toggle",
        response_model=AccountListResponse,
        responses=error_responses,
        tags=["Admin"],
        summary="Ban or unban a member",
    )
    async def toggle_active(
        account_id: str,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> AccountListResponse:
        return api_service.toggle_active(username, token, account_id)

    @app.get(
        "/api/v1/admin/accounts/{target_username}/share",
        response_model=AccessSummaryResponse,
        responses={**error_responses, 404: {"model": ErrorResponse}},
        tags=["Admin"],
        summary="Shareable access text for a member",
    )
    async def access_summary(
        target_username: str,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> AccessSummaryResponse:
        return api_service.access_summary(username, token, target_username)

    # =========================================================================
    # Workspace Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/workspace",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Get the editing state",
    )
    async def get_workspace(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.get_workspace(username, token)

    @app.delete(
        "/api/v1/workspace",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Start a new project",
    )
    async def clear_project(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.clear_project(username, token)

    @app.put(
        "/api/v1/workspace/image",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Load a new primary image (resets history)",
    )
    async def reset_history(
        image: Annotated[UploadFile, File(description="Primary image")],
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> WorkspaceResponse:
        data, media_type = await read_upload(image)
        return api_service.reset_history(username, token, data, media_type)

    @app.get(
        "/api/v1/workspace/image",
        responses={**error_responses, 200: {"content": {"image/png": {}}}},
        tags=["Workspace"],
        summary="Download the current image",
    )
    async def current_image(username: UsernameHeader, token: TokenHeader = None) -> Response:
        version = api_service.current_image(username, token)
        return Response(content=version.data, media_type=version.media_type)

    @app.post(
        "/api/v1/workspace/undo",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Step back in history",
    )
    async def undo(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.undo(username, token)

    @app.post(
        "/api/v1/workspace/redo",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Step forward in history",
    )
    async def redo(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.redo(username, token)

    @app.post(
        "/api/v1/workspace/origin",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Show the original image (redo history kept)",
    )
    async def reset_to_origin(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.reset_to_origin(username, token)

    @app.put(
        "/api/v1/workspace/reference",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Set the reference image",
    )
    async def set_reference(
        image: Annotated[UploadFile, File(description="Style reference image")],
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> WorkspaceResponse:
        data, media_type = await read_upload(image)
        return api_service.set_reference_image(username, token, data, media_type)

    @app.delete(
        "/api/v1/workspace/reference",
        response_model=WorkspaceResponse,
        responses=error_responses,
        tags=["Workspace"],
        summary="Clear the reference image",
    )
    async def clear_reference(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.clear_reference_image(username, token)

    # Sync handlers: the transform call blocks, FastAPI runs these in a threadpool

    @app.post(
        "/api/v1/workspace/generate",
        response_model=WorkspaceResponse,
        responses={
            **error_responses,
            409: {"model": ErrorResponse, "description": "Generation in progress"},
            502: {"model": ErrorResponse, "description": "Transform failed"},
        },
        tags=["Workspace"],
        summary="Run one AI edit on the current image",
    )
    def generate(
        request: GenerateRequest,
        username: UsernameHeader,
        token: TokenHeader = None,
    ) -> WorkspaceResponse:
        return api_service.generate(username, token, request)

    @app.post(
        "/api/v1/workspace/upscale",
        response_model=WorkspaceResponse,
        responses={
            **error_responses,
            409: {"model": ErrorResponse, "description": "Generation in progress"},
            502: {"model": ErrorResponse, "description": "Transform failed"},
        },
        tags=["Workspace"],
        summary="Upscale the current image to 4K",
    )
    def upscale(username: UsernameHeader, token: TokenHeader = None) -> WorkspaceResponse:
        return api_service.upscale(username, token)

    # =========================================================================
    # Misc Endpoints
    # =========================================================================

    @app.get("/api/v1/styles", response_model=StyleListResponse, tags=["Misc"])
    async def list_styles() -> StyleListResponse:
        return StyleListResponse(
            styles=dict(IMAGE_STYLES),
            presets=[
                PresetInfo(key=p.key, label=p.label, prompt=p.prompt)
                for p in PROMPT_PRESETS.values()
            ],
        )

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Misc"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="retouch", version=__version__)

    return app
