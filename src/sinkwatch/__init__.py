"""
sinkwatch: Verify counters a background process publishes to a metrics sink file.

Tails the sink, waits for fresh snapshots, and checks that the published
counters are present, internally ordered, and advance between cycles.
"""

__version__ = "0.1.0"
