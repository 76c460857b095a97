"""StatementLens: bank statement extraction through a multimodal model."""
__version__ = "0.1.0"
