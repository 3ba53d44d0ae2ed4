"""
costgraph: query a cluster's resource graph and attribute node cost to pods.
"""

__version__ = "0.1.0"
