"""Team delivery metrics and the natural-language query interpreter."""
