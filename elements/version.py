VERSION = "7.0.8"


def version() -> str:
    return VERSION


def version_info() -> tuple:
    """Numeric version components, e.g. (7, 0, 8). Tuples compare like versions."""
    return tuple(int(part) for part in VERSION.split("."))
