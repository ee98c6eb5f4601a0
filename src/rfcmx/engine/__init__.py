"""RFC generation pipeline and identifier validation."""
