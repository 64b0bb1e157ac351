"""Plan generation services."""
