"""Configuration tree and file loading for sitepage.

This subpackage provides :class:`ConfigTree`, the nested settings store a site
bootstrap populates either eagerly from single files or lazily from a
directory, plus the exceptions raised when configuration is unusable.
Supported document formats are JSON, YAML 1.2 and TOML.

Examples
--------
>>> from sitepage.config import ConfigTree
>>> conf = ConfigTree()
>>> conf.load_file("conf/site.json")  # doctest: +SKIP
>>> conf["template"]  # doctest: +SKIP
'layouts:site'
"""

from .errors import MissingTemplateError, SiteConfigError
from .loader import load_config_mapping, read_config_file
from .tree import ConfigTree

__all__ = [
    "ConfigTree",
    "MissingTemplateError",
    "SiteConfigError",
    "load_config_mapping",
    "read_config_file",
]
