"""
Exit codes for the relay CLI.

Scripts driving the registration commands can branch on these.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Missing or invalid arguments / configuration
ERROR_INVALID_ARGS = 2

# Todoist rejected the client credentials
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, non-2xx response)
ERROR_NETWORK = 4


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
    }
    return code_names.get(code, f"UNKNOWN({code})")
