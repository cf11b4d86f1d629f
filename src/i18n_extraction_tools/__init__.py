import importlib.metadata

__version__ = importlib.metadata.version("i18n_extraction_tools")
