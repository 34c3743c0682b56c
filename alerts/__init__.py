"""Alert delivery and reminder application."""
