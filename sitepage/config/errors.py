"""Exceptions raised while resolving site configuration."""

from __future__ import annotations


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class MissingTemplateError(SiteConfigError):
    """Raised when no page template can be resolved from any source."""


__all__ = ["MissingTemplateError", "SiteConfigError"]
