"""ImagePicker: newest-first image record store with a small HTTP front end."""

__version__ = "0.1.0"
