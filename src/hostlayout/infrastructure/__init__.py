"""Infrastructure layer — durable storage of the layout document."""
