"""Transaction credit score kernel: multi-chain wallet activity scoring."""

__version__ = "0.3.0"
