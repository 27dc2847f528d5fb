"""I/O layer: Arrow schemas and output path conventions."""
