"""Output layer — turns issue sequences into user-facing text."""
