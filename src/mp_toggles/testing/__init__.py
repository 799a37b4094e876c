"""Testing helpers – fakes, pytest fixtures and Hypothesis strategies."""
