"""Command-line interface for the customer/post data store."""
