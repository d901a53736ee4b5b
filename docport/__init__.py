"""Port inline C# documentation to include references into shared XML docs."""

__version__ = "0.1.0"
