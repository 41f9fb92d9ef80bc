"""
Smart RLM: answer questions over documents larger than a model context.

A root agent writes a processing strategy as Python; the strategy runs in
a sandbox with a fixed toolbox (chunking, keyword filtering, concurrent
leaf-agent queries, answer reporting).
"""

__version__ = "0.1.0"
