"""Core infrastructure: configuration, execution gate, workspace, logging."""
