from .config_reader import ConfigReader, load_client_config

__all__ = ["ConfigReader", "load_client_config"]
