"""Application layer – feature toggle use cases."""
