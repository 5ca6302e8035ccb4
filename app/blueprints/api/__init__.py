"""JSON API blueprints: /api/plants and /api/dashboard."""
