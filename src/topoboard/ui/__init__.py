"""Qt integration: a signal/slot bridge for renderers. Requires PyQt6."""
