"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Gates every privileged call through the SessionAuthority
2. Checks the ADMIN capability for account management
3. Routes editing calls to the caller's workspace
4. Formats responses

A call that fails session validation also drops the caller's workspace
(forced logout), so the next action has to log in again.

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

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
    # Shared
    AccountInfo,
    VersionInfo,
    ReferenceInfo,
)
from ..accounts import (
    Account,
    AccountRegistry,
    AccountStore,
    InMemoryAccountStore,
    SessionAuthority,
    seed_if_empty,
)
from ..editing import (
    EditOrchestrator,
    ImageVersion,
    apply_style,
    gemini_transform_factory,
    preset_prompt,
)
from ..errors import AdminRequired, MissingInput, SessionInvalid
from ..session import Workspace, WorkspaceManager

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        login = service.login(LoginRequest(username="member1", password="123456"))
        token = login.session_token

        service.reset_history("member1", token, image_bytes, "image/jpeg")
        service.generate("member1", token, GenerateRequest(prompt="Add a pool"))
    """
    store: AccountStore = field(default_factory=InMemoryAccountStore)
    orchestrator: EditOrchestrator = field(
        default_factory=lambda: EditOrchestrator(gemini_transform_factory())
    )
    workspaces: WorkspaceManager = field(default_factory=WorkspaceManager)
    authority: SessionAuthority | None = None
    registry: AccountRegistry | None = None

    def __post_init__(self):
        seed_if_empty(self.store)
        if self.authority is None:
            self.authority = SessionAuthority(self.store)
        if self.registry is None:
            self.registry = AccountRegistry(self.store, self.authority)

    # =========================================================================
    # Session
    # =========================================================================

    def login(self, request: LoginRequest) -> LoginResponse:
        account = self.authority.login(request.username, request.password)
        self.workspaces.open(account)
        return LoginResponse(
            session_token=account.session_token,
            account=self._account_info(account),
            requires_api_key=not account.api_key,
        )

    def logout(self, username: str, token: str | None) -> LogoutResponse:
        """
        Forget the client's session.

        The server-side token is left in place; only local state goes.
        """
        workspace = self.workspaces.get(username)
        closed = False
        if workspace is not None and token and workspace.token == token:
            closed = self.workspaces.close(username)
            self.authority.logout(username)
        return LogoutResponse(success=closed, username=username)

    def validate_session(self, username: str, token: str | None) -> SessionCheckResponse:
        return SessionCheckResponse(
            username=username,
            valid=self.authority.validate_session(username, token),
        )

    def save_api_key(self, username: str, token: str | None, request: ApiKeyRequest) -> AccountInfo:
        self._require_session(username, token)
        account = self.registry.save_api_key(username, request.api_key)
        workspace = self.workspaces.get(username)
        if workspace is not None:
            workspace.api_key = account.api_key
        return self._account_info(account)

    # =========================================================================
    # Account administration
    # =========================================================================

    def add_account(self, username: str, token: str | None, request: AddAccountRequest) -> AccountInfo:
        self._require_admin(username, token)
        account = self.registry.add_account(
            request.username,
            request.password,
            expiry_date=request.expiry_date,
        )
        return self._account_info(account)

    def change_password(
        self,
        username: str,
        token: str | None,
        target_username: str,
        request: ChangePasswordRequest,
    ) -> AccountInfo:
        self._require_admin(username, token)
        self.registry.change_password(target_username, request.new_password)
        # The member's next call fails validation; drop their workspace now
        self.workspaces.close(target_username)
        return self._account_info(self.store.get_account(target_username))

    def toggle_active(self, username: str, token: str | None, account_id: str) -> AccountListResponse:
        self._require_admin(username, token)
        accounts = self.registry.toggle_active(account_id)
        for account in accounts:
            if not account.is_active:
                self.workspaces.close(account.username)
        return self._account_list(accounts)

    def list_accounts(self, username: str, token: str | None) -> AccountListResponse:
        self._require_admin(username, token)
        return self._account_list(self.registry.list_accounts())

    def access_summary(self, username: str, token: str | None, target_username: str) -> AccessSummaryResponse:
        self._require_admin(username, token)
        return AccessSummaryResponse(
            username=target_username,
            text=self.registry.access_summary(target_username),
        )

    # =========================================================================
    # Editing
    # =========================================================================

    def get_workspace(self, username: str, token: str | None) -> WorkspaceResponse:
        return self._workspace_response(self._workspace(username, token))

    def reset_history(
        self,
        username: str,
        token: str | None,
        image_data: bytes,
        media_type: str,
    ) -> WorkspaceResponse:
        """Load a brand-new primary image."""
        workspace = self._workspace(username, token)
        if not image_data:
            raise MissingInput("An image file is required.")
        with workspace.busy():
            workspace.history.reset(ImageVersion.create(image_data, media_type, prefix="orig"))
        return self._workspace_response(workspace)

    def undo(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            workspace.history.undo()
        return self._workspace_response(workspace)

    def redo(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            workspace.history.redo()
        return self._workspace_response(workspace)

    def reset_to_origin(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            workspace.history.reset_cursor_to_origin()
        return self._workspace_response(workspace)

    def clear_project(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            workspace.clear_project()
        return self._workspace_response(workspace)

    def set_reference_image(
        self,
        username: str,
        token: str | None,
        image_data: bytes,
        media_type: str,
    ) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        if not image_data:
            raise MissingInput("An image file is required.")
        with workspace.busy():
            workspace.reference.set(image_data, media_type)
        return self._workspace_response(workspace)

    def clear_reference_image(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            workspace.reference.clear()
        return self._workspace_response(workspace)

    def generate(self, username: str, token: str | None, request: GenerateRequest) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        prompt = request.prompt
        if request.preset:
            try:
                prompt = preset_prompt(request.preset)
            except KeyError:
                raise MissingInput(f"Unknown scene preset: {request.preset!r}") from None
        if request.style:
            try:
                prompt = apply_style(prompt, request.style)
            except KeyError:
                raise MissingInput(f"Unknown image style: {request.style!r}") from None

        with workspace.busy():
            self.orchestrator.generate(
                workspace.history,
                workspace.reference,
                workspace.api_key,
                prompt=prompt,
                refine_prompt=request.refine_prompt,
            )
        return self._workspace_response(workspace)

    def upscale(self, username: str, token: str | None) -> WorkspaceResponse:
        workspace = self._workspace(username, token)
        with workspace.busy():
            self.orchestrator.upscale(workspace.history, workspace.api_key)
        return self._workspace_response(workspace)

    def current_image(self, username: str, token: str | None) -> ImageVersion:
        workspace = self._workspace(username, token)
        current = workspace.history.current()
        if current is None:
            raise MissingInput("No image loaded.")
        return current

    # =========================================================================
    # Guards
    # =========================================================================

    def _require_session(self, username: str, token: str | None) -> Account:
        """Validate or force a logout."""
        try:
            return self.authority.require_session(username, token)
        except SessionInvalid:
            workspace = self.workspaces.get(username)
            if workspace is not None and workspace.token == token:
                self.workspaces.close(username)
            logger.info("Rejected invalid session for %r", username)
            raise

    def _require_admin(self, username: str, token: str | None) -> Account:
        account = self._require_session(username, token)
        if not account.is_admin:
            raise AdminRequired()
        return account

    def _workspace(self, username: str, token: str | None) -> Workspace:
        account = self._require_session(username, token)
        workspace = self.workspaces.get(username)
        if workspace is None or workspace.token != token:
            # Valid token but no local state (e.g. after a restart)
            workspace = self.workspaces.open(account)
        return workspace

    # =========================================================================
    # Converters
    # =========================================================================

    def _account_info(self, account: Account) -> AccountInfo:
        return AccountInfo(
            id=account.id,
            username=account.username,
            role=account.role,
            is_active=account.is_active,
            expiry_date=account.expiry_date,
            has_api_key=bool(account.api_key),
            has_session=account.session_token is not None,
        )

    def _account_list(self, accounts: list[Account]) -> AccountListResponse:
        return AccountListResponse(
            accounts=[self._account_info(a) for a in accounts],
            count=len(accounts),
        )

    def _workspace_response(self, workspace: Workspace) -> WorkspaceResponse:
        history = workspace.history
        current = history.current()
        ref = workspace.reference.image
        return WorkspaceResponse(
            username=workspace.username,
            cursor=history.cursor,
            versions=[
                VersionInfo(
                    version_id=v.id,
                    media_type=v.media_type,
                    created_at=v.created_at,
                    size_bytes=len(v.data),
                )
                for v in history.versions
            ],
            current_version_id=current.id if current else None,
            can_undo=history.can_undo,
            can_redo=history.can_redo,
            reference=(
                ReferenceInfo(media_type=ref.media_type, size_bytes=len(ref.data))
                if ref else None
            ),
            busy=workspace.is_busy,
        )
