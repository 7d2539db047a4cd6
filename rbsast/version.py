"""Version information for RBSAST."""

# RBSAST version
RBSAST_VERSION_MAJOR = 0
RBSAST_VERSION_MINOR = 3
RBSAST_VERSION_PATCH = 0
RBSAST_VERSION = f"{RBSAST_VERSION_MAJOR}.{RBSAST_VERSION_MINOR}.{RBSAST_VERSION_PATCH}"

# RBS syntax version we're compatible with
RBS_SYNTAX_VERSION = "3.0.0"
RBS_SYNTAX_VERSION_MAJOR = 3
RBS_SYNTAX_VERSION_MINOR = 0
RBS_SYNTAX_VERSION_PATCH = 0


def get_version_string() -> str:
    """Get full version string."""
    return f"RBSAST {RBSAST_VERSION} (RBS {RBS_SYNTAX_VERSION} compatible)"


def get_version_info() -> dict:
    """Get version information as dictionary."""
    return {
        "rbsast": {
            "major": RBSAST_VERSION_MAJOR,
            "minor": RBSAST_VERSION_MINOR,
            "patch": RBSAST_VERSION_PATCH,
            "version": RBSAST_VERSION,
        },
        "rbs": {
            "major": RBS_SYNTAX_VERSION_MAJOR,
            "minor": RBS_SYNTAX_VERSION_MINOR,
            "patch": RBS_SYNTAX_VERSION_PATCH,
            "version": RBS_SYNTAX_VERSION,
        },
    }
