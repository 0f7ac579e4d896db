"""Exit codes for todo-tui."""

# Clean quit
SUCCESS = 0

# The event loop could not be started (or crashed)
ERROR_GENERAL = 1


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
    }
    return code_names.get(code, f"UNKNOWN({code})")
