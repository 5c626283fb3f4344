"""Common literal values used across sitepage.

These constants keep registry keys and file suffixes centralized so the
renderer, the configuration tree, and tests can import the same values without
drifting. Intended for internal use within the sitepage package.

Examples
--------
>>> from sitepage import _constants
>>> _constants.SITE_TEMPLATE
'site.template'
>>> ".yaml" in _constants.CONFIG_SUFFIXES
True
"""

SITE_CONF = "site.conf"
SITE_TEMPLATE = "site.template"
TEMPLATE_SEPARATOR = ":"
CONFIG_SUFFIXES = (".json", ".yaml", ".yml", ".toml")
VIEW_SUFFIXES = (".jinja", ".html", ".j2")
