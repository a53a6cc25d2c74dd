
__author__ = "slackinvite developers"

__all__ = [
    "__version__",
    "version_info",
]


version_info = (0, 3, 0)

__version__ = ".".join(map(str, version_info))
