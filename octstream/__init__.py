"""Plugin interfaces, acquisition buffers, spectral window functions and a file-replaying virtual acquisition system for OCT raw data."""

__version__ = "0.1.0"

__all__ = [
    "plugin",
    "acquisition",
    "extension",
    "windowfunction",
    "outputwindow",
    "trackball",
    "stringspinbox",
    "systemmanager",
    "systemchooser",
    "demoextension",
    "virtualoctsettings",
    "virtualoctsystem",
]