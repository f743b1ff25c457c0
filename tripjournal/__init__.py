"""Trip planning and travel journal API."""
