"""goverage - one coverage profile for many Go packages."""

__version__ = "0.1.0"
