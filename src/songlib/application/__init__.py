"""Application layer: services orchestrating domain and persistence."""
