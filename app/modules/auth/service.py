import hashlib
import logging
import time
from supabase import Client
from app.config.permissions_config import ROLE_ADMIN
from app.database.supabase_client import SupabaseClient
from app.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Dict, Any, Iterable

logger = logging.getLogger(__name__)

# Resolved identities keyed by token hash; many parallel requests share one Supabase lookup
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _gateway_error(error: Exception, markers: Iterable[str], status_code: int, detail: str, fallback: str) -> HTTPException:
    """Translate a Supabase error into an HTTP error by message markers"""
    message = str(error)
    if any(marker in message.lower() for marker in markers):
        return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=500, detail=f"{fallback}: {message}")


class AuthService:
    """Thin wrapper over Supabase Auth. Identity lives there; roles come from app_metadata."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password
            })
        except Exception as e:
            raise _gateway_error(e, ("already registered", "already exists"), 400, "User already exists", "Registration failed")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")
        logger.info(f"Registered auth user {auth_response.user.id}")
        return RegisterResponse(
            user_id=auth_response.user.id,
            email=auth_response.user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            raise _gateway_error(e, ("invalid", "credentials"), 401, "Invalid email or password", "Login failed")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return TokenResponse(
            access_token=auth_response.session.access_token,
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to {id, email, app_metadata}, cached for a short TTL"""
        cache_key = _token_key(token)
        now = time.monotonic()
        cached = _AUTH_USER_CACHE.get(cache_key)
        if cached is not None:
            user_data, expiry = cached
            if now < expiry:
                return user_data
            _AUTH_USER_CACHE.pop(cache_key, None)

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info(f"Token rejected by auth gateway: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "app_metadata": user.app_metadata or {},
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data

    def logout(self, token: str) -> bool:
        # Tokens are stateless JWTs; forgetting the cached identity forces re-validation
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Supabase sign_out failed: {e}")
            return False

    def set_admin(self, user_id: str, is_admin: bool = True) -> bool:
        """Grant or revoke the admin role in app_metadata (requires service role key)"""
        admin_client = SupabaseClient.get_admin_client()
        if admin_client is None:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update app_metadata."
            )
        try:
            response = admin_client.auth.admin.update_user_by_id(
                user_id,
                {"app_metadata": {"role": ROLE_ADMIN if is_admin else None}}
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update admin status: {e}")

        if not response.user:
            raise HTTPException(status_code=404, detail="User not found")
        _AUTH_USER_CACHE.clear()
        logger.info(f"Set admin={is_admin} for user {user_id}")
        return True
