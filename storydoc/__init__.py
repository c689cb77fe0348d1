"""Rich-text document format converters for the story editor."""
