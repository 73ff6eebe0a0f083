"""Startup resolution: shell, locale, option trees, socket path and deferred options."""
