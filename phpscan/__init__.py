"""phpscan — static inventory, line-count and security audit for PHP projects."""

__version__ = "0.1.0"
