"""Client hand-off: config files, headless commands and the entry point."""
