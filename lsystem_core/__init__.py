"""L-system grammar rewriting, turtle replay and frame-paced reveal."""
