from .config_loader import load_session_config
from .errors import LoaderError

__all__ = ["load_session_config", "LoaderError"]
