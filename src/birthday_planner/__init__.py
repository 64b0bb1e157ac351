"""Birthday plan generation core."""
