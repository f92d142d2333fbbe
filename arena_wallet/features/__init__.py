"""Feature modules for the ArenaX wallet core."""
