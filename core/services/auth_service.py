# =============================================================================
# core/services/auth_service.py - Authentication Business Logic
# =============================================================================
# Signup, login and token-to-user resolution.
#
# Flow:
#   signup: validate -> hash password -> create record -> issue token
#   login:  find user -> check credential (legacy, then salted) -> issue token
#   authenticate_token: verify token -> resolve user by id
# =============================================================================

import logging

from app.exceptions import (
    ConfigurationError,
    InvalidCredentialsError,
    UnauthorizedError,
    UserNotFoundError,
    UsernameTakenError,
    ValidationFailedError,
)
from core.models.auth import AuthResult, LoginRequest, SignupRequest
from core.models.user import UserRecord, default_avatar_url
from lib.passwords import check_credential, hash_password
from lib.tokens import TokenClaims, TokenConfigurationError, TokenIssuer
from lib.user_store import DuplicateUsernameError, UserStore

logger = logging.getLogger(__name__)

DEFAULT_BIO = "Welcome to my theirBio profile!"


class AuthService:
    """
    Service for account creation and session tokens.
    """

    def __init__(
        self,
        store: UserStore,
        tokens: TokenIssuer,
        reserved_usernames: frozenset[str] = frozenset(),
    ):
        self.store = store
        self.tokens = tokens
        self.reserved_usernames = reserved_usernames

    def _require_token_config(self) -> None:
        if not self.tokens.is_configured:
            logger.error("JWT_SECRET is not set; refusing to authenticate")
            raise ConfigurationError("Authentication is not configured")

    def _issue_for(self, user: UserRecord) -> str:
        try:
            return self.tokens.issue(TokenClaims(sub=user.id, username=user.username))
        except TokenConfigurationError:
            raise ConfigurationError("Authentication is not configured")

    def signup(self, request: SignupRequest) -> AuthResult:
        """
        Create an account and sign the caller in.

        Raises:
            ValidationFailedError: If the username is reserved
            UsernameTakenError: If the username already exists
            ConfigurationError: If no signing secret is configured
        """
        username = request.username
        if username.lower() in self.reserved_usernames:
            raise ValidationFailedError("username", "Username is reserved")

        # Checked before writing so a misconfigured server creates nothing
        self._require_token_config()

        user = UserRecord(
            username=username,
            password_hash=hash_password(request.password),
            account_type=request.account_type,
            display_name=username,
            bio=DEFAULT_BIO,
            avatar_url=default_avatar_url(username, request.account_type),
        )

        try:
            self.store.create(user)
        except DuplicateUsernameError:
            raise UsernameTakenError(username)

        logger.info(f"Created {user.account_type.value} account {user.id} ({username})")

        return AuthResult(user=user.to_public(), token=self._issue_for(user))

    def login(self, request: LoginRequest) -> AuthResult:
        """
        Authenticate with username and password.

        Raises:
            UserNotFoundError: If the username doesn't exist
            InvalidCredentialsError: If the password doesn't match
            ConfigurationError: If no signing secret is configured
        """
        self._require_token_config()

        user = self.store.find_by_username(request.username)
        if user is None:
            raise UserNotFoundError(request.username)

        if not check_credential(request.password, user.password_hash):
            logger.warning(f"Failed login for {request.username}")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return AuthResult(user=user.to_public(), token=self._issue_for(user))

    def authenticate_token(self, token: str) -> UserRecord:
        """
        Resolve a bearer token to the current user record.

        Raises:
            UnauthorizedError: If the token is invalid/expired or the user is gone
        """
        claims = self.tokens.verify(token)
        if claims is None:
            raise UnauthorizedError("Invalid or expired token")

        user = self.store.find_by_id(claims.user_id)
        if user is None:
            logger.warning(f"Token for unknown user {claims.user_id}")
            raise UnauthorizedError("Invalid or expired token")

        return user
