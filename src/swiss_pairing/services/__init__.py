"""Round workflow services: scoring, persistence and round advancement."""
