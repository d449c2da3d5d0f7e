"""Pay Schedule - pay period scheduling and pay stub estimates."""

__version__ = "0.1.0"
