"""Domain layer: entities, exceptions, ports and paging rules."""
