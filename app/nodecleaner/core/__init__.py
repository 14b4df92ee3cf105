"""Configuration, paths and theming for nodecleaner."""
