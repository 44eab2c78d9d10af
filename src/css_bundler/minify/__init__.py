"""CSS minification."""

from .minifier import clean_comments, minify, wrap_lines

__all__ = ["clean_comments", "minify", "wrap_lines"]
