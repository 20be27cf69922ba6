"""Program name and version."""

VERSION = "4.0.4rc3"
PROGRAM_NAME = "siege"


def banner() -> str:
    """Return the program name followed by its version."""
    return f"{PROGRAM_NAME} {VERSION}"