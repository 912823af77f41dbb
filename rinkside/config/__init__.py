from .env_config import RinksideEnv, load_env
from .loader import Config, ConfigStore, load_config, save_config

__all__ = [
    "Config",
    "ConfigStore",
    "RinksideEnv",
    "load_config",
    "load_env",
    "save_config",
]
