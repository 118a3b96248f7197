"""Output layer: Rich rendering, JSON formatting, and the account report."""
