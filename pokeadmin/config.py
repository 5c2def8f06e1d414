from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PokeAdmin"
    debug: bool = False
    log_level: str = "INFO"

    # Primary Pokémon TCG data API and user/auth backend.
    # Empty means unconfigured: catalog lookups go straight to the backup.
    external_api_base_url: str = ""

    # Public mirror consulted when the primary fails
    backup_api_base_url: str = "https://api.pokemontcg.io/v2"

    request_timeout: float = 10.0

    app_url: str = "http://localhost:9002"
    logout_redirect_url: str = ""
    secure_cookies: bool = False


settings = Settings()


# =============================================================================
# SESSION COOKIES
# =============================================================================

SESSION_COOKIE = "session_token"
PASSWORD_TOKEN_COOKIE = "password_access_token"
ID_TOKEN_COOKIE = "id_token"

# Cleared on logout along with the session tokens
OIDC_TRANSIENT_COOKIES = ("oidc_code_verifier", "oidc_nonce", "oidc_state")

# Password login session lifetime (7 days)
PASSWORD_TOKEN_MAX_AGE = 60 * 60 * 24 * 7
