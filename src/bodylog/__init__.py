"""bodylog: daily body weight and body-metric tracking."""

__version__ = "0.1.0"
