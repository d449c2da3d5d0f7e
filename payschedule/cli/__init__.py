"""Pay Schedule CLI."""
