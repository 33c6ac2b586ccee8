import sys
from pathlib import Path


def get_resource_path(*parts: str) -> Path:
    """
    Get the absolute path to a bundled resource, handling PyInstaller bundles.

    In development and pip installs: returns a path inside the sentirax package
    In PyInstaller bundle: returns path inside _MEIPASS/sentirax

    Args:
        *parts: Path components relative to the package root
                e.g. get_resource_path('web', 'index.html')

    Returns:
        Absolute Path to the resource
    """
    if hasattr(sys, '_MEIPASS'):
        base = Path(sys._MEIPASS) / "sentirax"
    else:
        base = Path(__file__).resolve().parent.parent

    return base.joinpath(*parts)
