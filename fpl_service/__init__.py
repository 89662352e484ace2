"""GraphQL read API over the fantasy-football statistics database."""

__version__ = "1.0.0"
