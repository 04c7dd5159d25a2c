"""Domain layer: exceptions shared by every other layer."""
