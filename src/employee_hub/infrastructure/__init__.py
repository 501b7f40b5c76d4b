"""Infrastructure helpers shared across the domain and connector layers."""
