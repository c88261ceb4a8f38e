"""Authentication-specific exceptions."""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Base authentication error."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidTokenError(AuthenticationError):
    """Invalid token provided."""

    def __init__(self) -> None:
        super().__init__(detail="Invalid token")


class MissingTokenError(AuthenticationError):
    """No bearer token or access_token cookie on a request that needs one."""

    def __init__(self) -> None:
        super().__init__(detail="Authentication required")


class SupabaseConfigError(HTTPException):
    """Supabase selected as auth provider but the client is not configured."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication provider 'supabase' is not properly configured",
        )


class UnknownAuthProviderError(HTTPException):
    """AUTH_PROVIDER holds a value we don't know how to handle."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unknown authentication provider '{provider}'",
        )
