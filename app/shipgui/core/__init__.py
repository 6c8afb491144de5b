"""Core services for shipgui: configuration, paths, commands and theming."""
