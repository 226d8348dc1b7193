"""Application layer: record formatting use case and its ports."""
