import os


def create_directory_if_not_exists(directory):
    """
    Checks if a directory exists and creates it if it doesn't.

    Attributes
    ----------
    directory : str
        The path to the directory to check.
    """

    if not os.path.exists(directory):
        os.makedirs(directory)


def format_seconds(seconds: float) -> str:
    """Formats a wall-clock duration for run summaries."""
    if seconds < 0:
        return "0.000 s"

    if seconds < 60:
        return f"{seconds:.3f} s"

    total_seconds = int(seconds)
    minutes = total_seconds // 60
    remaining_seconds = total_seconds % 60

    return f"{minutes}:{remaining_seconds:02d} min"
