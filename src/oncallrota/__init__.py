"""On-call rota generation with holiday caps and patching fairness."""

__version__ = "0.1.0"
