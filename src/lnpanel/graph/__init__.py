"""Channel-graph utilities for the node-graph panel.

The graph is rebuilt from the two input tables on every render: nodes are
network peers, edges are payment channels. Nothing is cached between calls.
"""
