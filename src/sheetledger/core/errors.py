"""Error codes and user-facing messages.

Each entry carries:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: Text returned to the client
- suggestion: Actionable guidance for the client
- retry_allowed: Whether repeating the same request may succeed
"""

ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Username is already registered",
        "user_message": "User already exists",
        "suggestion": "Choose a different username or log in instead.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "No user with this username",
        "user_message": "User not found",
        "suggestion": "Check the username or register a new account.",
        "retry_allowed": False,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Password does not match stored hash",
        "user_message": "Incorrect password",
        "suggestion": "Check your password and try again.",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Credential store operation failed",
        "user_message": "Internal Server Error",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "SHEET_001": {
        "code": "SHEET_001",
        "message": "Spreadsheet service call failed",
        "user_message": "Internal Server Error",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request body failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Unhandled server error",
        "user_message": "Internal Server Error",
        "suggestion": "Please try again later.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to the generic server error entry.
    """
    return ERROR_CATALOG.get(error_code, ERROR_CATALOG["SYS_001"])


def error_body(error_code: str, message: str | None = None) -> dict:
    """Build the JSON body returned to the client for an error code.

    Args:
        error_code: Code from the catalog
        message: Optional override for the client-facing text

    Returns:
        Dict with ``error``, ``error_code``, ``suggestion`` and ``retry_allowed``
    """
    info = get_error(error_code)
    return {
        "error": message or info["user_message"],
        "error_code": info["code"],
        "suggestion": info["suggestion"],
        "retry_allowed": info["retry_allowed"],
    }
