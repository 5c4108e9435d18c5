"""tabjump - fuzzy-search and jump between tmux windows."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tabjump")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
