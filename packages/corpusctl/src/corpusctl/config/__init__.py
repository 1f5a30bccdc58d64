from .loader import CONFIG_FILENAME, DEFAULT_CONFIG, CorpusConfig, config_from_mapping, load_config

__all__ = ["CONFIG_FILENAME", "CorpusConfig", "DEFAULT_CONFIG", "config_from_mapping", "load_config"]
