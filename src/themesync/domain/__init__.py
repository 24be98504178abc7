"""Domain layer: records, ports and the theme synchronisation services."""
