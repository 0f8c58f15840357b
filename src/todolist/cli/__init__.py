"""Console entry point, composition root and slash commands."""
