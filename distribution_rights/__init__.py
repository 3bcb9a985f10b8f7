"""
distribution-rights: hierarchical regional permissions for distributors.

Distributors form a forest. Each carries include and exclude rules keyed by
region code (``US``, ``CA-US``, ``LA-CA-US``), and a child is only ever
authorized where its parent is authorized too.
"""

__version__ = "0.1.0"
