"""Language routing for the root URL of a multilingual site."""
